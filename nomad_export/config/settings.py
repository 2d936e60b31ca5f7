"""Client settings for nomad-export.

Settings are read from the NOMAD_* environment variables first, then
overlaid with the command-line options that were actually given.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, Tuple, Union
from urllib.parse import urlparse

from ..exceptions import ConfigurationError
from .constants import DEFAULT_ADDRESS, DEFAULT_TIMEOUT_SECONDS, ENV_VAR_DEFINITIONS


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS or value is None:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def get_env_var(name: str) -> Optional[str]:
    """Get an environment variable, falling back to its documented default.

    Empty values count as unset.

    Raises:
        ConfigurationError: If the value is outside the variable's valid values.
    """
    value = os.environ.get(name)
    if value is not None:
        value = value.strip() or None

    is_valid, error = validate_env_var(name, value)
    if not is_valid:
        raise ConfigurationError(error, setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def _env_bool(name: str) -> bool:
    return (get_env_var(name) or "").lower() in {"1", "true"}


def _env_int(name: str) -> int:
    raw = get_env_var(name)
    try:
        return int(raw) if raw is not None else DEFAULT_TIMEOUT_SECONDS
    except ValueError as e:
        raise ConfigurationError(f"Invalid integer '{raw}' for {name}", setting=name) from e


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings for the Nomad HTTP API."""

    address: str = DEFAULT_ADDRESS
    token: Optional[str] = None
    token_file: Optional[str] = None
    ca_cert: Optional[str] = None
    ca_path: Optional[str] = None
    client_cert: Optional[str] = None
    client_key: Optional[str] = None
    tls_server_name: Optional[str] = None
    skip_verify: bool = False
    timeout: int = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "ClientSettings":
        return cls(
            address=get_env_var("NOMAD_ADDR") or DEFAULT_ADDRESS,
            token=get_env_var("NOMAD_TOKEN"),
            token_file=get_env_var("NOMAD_TOKEN_FILE"),
            ca_cert=get_env_var("NOMAD_CACERT"),
            ca_path=get_env_var("NOMAD_CAPATH"),
            client_cert=get_env_var("NOMAD_CLIENT_CERT"),
            client_key=get_env_var("NOMAD_CLIENT_KEY"),
            tls_server_name=get_env_var("NOMAD_TLS_SERVER_NAME"),
            skip_verify=_env_bool("NOMAD_SKIP_VERIFY"),
            timeout=_env_int("NOMAD_EXPORT_TIMEOUT"),
        )

    def merge(self, **overrides: Any) -> "ClientSettings":
        """Overlay the overrides that have been set; None leaves a value alone."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def resolve_token(self) -> Optional[str]:
        """Return the token, reading it from token_file when none was given directly."""
        if self.token:
            return self.token
        if not self.token_file:
            return None
        try:
            token = Path(self.token_file).expanduser().read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read token file: {e}", setting="token_file", path=self.token_file
            ) from e
        return token or None

    @property
    def verify(self) -> Union[bool, str]:
        """The value handed to requests as `verify`."""
        if self.skip_verify:
            return False
        return self.ca_cert or self.ca_path or True

    @property
    def cert(self) -> Optional[Tuple[str, str]]:
        if self.client_cert and self.client_key:
            return (self.client_cert, self.client_key)
        return None

    def validate(self) -> None:
        """Raise ConfigurationError for settings that cannot produce a working client."""
        parsed = urlparse(self.address)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"Invalid Nomad address '{self.address}'", setting="address"
            )
        if bool(self.client_cert) != bool(self.client_key):
            raise ConfigurationError(
                "Both a client certificate and a client key must be given",
                setting="client_cert" if self.client_key else "client_key",
            )
        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be positive", setting="timeout")
