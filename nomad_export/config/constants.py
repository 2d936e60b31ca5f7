"""
Centralized constants for nomad-export.

Defaults, the exclusion vocabulary, API paths and the environment variables
the client settings are read from all live here.
"""

# =============================================================================
# NOMAD API
# =============================================================================

DEFAULT_ADDRESS = "http://127.0.0.1:4646"
TOKEN_HEADER = "X-Nomad-Token"

NAMESPACES_PATH = "/v1/namespaces"
JOBS_PATH = "/v1/jobs"
JOB_PATH = "/v1/job/{job_id}"

# Key fields the export document is indexed by
NAMESPACE_KEY_FIELD = "Name"
JOB_KEY_FIELD = "ID"
JOB_NAME_FIELD = "Name"

# =============================================================================
# TIMEOUTS (in seconds)
# =============================================================================

DEFAULT_TIMEOUT_SECONDS = 30

# =============================================================================
# EXPORT
# =============================================================================

# Data categories that may be excluded with --exclude
EXCLUDABLE_DATA_TYPES = ("catalog", "acls", "config-entries")

# Indentation of the serialized export document
JSON_INDENT = 3

# Permissions of an export written to a file
OUTPUT_FILE_MODE = 0o600

# Marker for "write to stdout" when given as the output path
STDOUT_MARKER = "-"

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

# Variables read by ClientSettings.from_env(), with their default and, where
# the value is an enumeration, the accepted values.
ENV_VAR_DEFINITIONS = {
    "NOMAD_ADDR": {"default": DEFAULT_ADDRESS},
    "NOMAD_TOKEN": {},
    "NOMAD_TOKEN_FILE": {},
    "NOMAD_CACERT": {},
    "NOMAD_CAPATH": {},
    "NOMAD_CLIENT_CERT": {},
    "NOMAD_CLIENT_KEY": {},
    "NOMAD_TLS_SERVER_NAME": {},
    "NOMAD_SKIP_VERIFY": {
        "default": "false",
        "valid_values": ["true", "false", "1", "0"],
    },
    "NOMAD_EXPORT_TIMEOUT": {"default": str(DEFAULT_TIMEOUT_SECONDS)},
}
