"""Custom exception hierarchy for nomad-export.

Every error raised by the package derives from NomadExportError, so callers
can catch the whole family with one except clause while still being able to
tell a transport failure from a bad configuration value.

Exception Hierarchy:
    NomadExportError (base)
    ├── ApiError - Nomad HTTP API calls
    │   ├── ApiConnectionError (retryable)
    │   ├── ApiResponseError
    │   └── ApiAuthenticationError
    ├── ExportError - traversal failures, wrapping the ApiError that caused them
    │   ├── NamespaceListError
    │   ├── JobListError
    │   ├── JobFetchError
    │   └── InvalidRecordError
    ├── ConfigurationError - settings and options
    │   └── InvalidExclusionError
    └── FileOperationError - File I/O
        └── FileWriteError

Usage:
    from nomad_export.exceptions import JobListError

    try:
        jobs = client.list_jobs(namespace)
    except ApiError as e:
        raise JobListError(f"error listing jobs for namespace {namespace}: {e}",
                           namespace=namespace) from e
"""

from typing import Any, Iterable, Optional


class NomadExportError(Exception):
    """Base exception for all nomad-export errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (namespace, job ID, URL...)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# API Errors
# =============================================================================


class ApiError(NomadExportError):
    """Base exception for Nomad API calls."""

    pass


class ApiConnectionError(ApiError):
    """Failed to reach the Nomad API - typically retryable."""

    def __init__(
        self,
        message: str = "API connection failed",
        *,
        url: Optional[str] = None,
        **context: Any,
    ) -> None:
        if url:
            context["url"] = url
        super().__init__(message, retryable=True, **context)


class ApiResponseError(ApiError):
    """The Nomad API answered with an error status or an unusable body."""

    def __init__(
        self,
        message: str = "Unexpected API response",
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        **context: Any,
    ) -> None:
        if url:
            context["url"] = url
        if status_code is not None:
            context["status_code"] = status_code
        if body:
            context["body"] = body[:200] + "..." if len(body) > 200 else body
        self.status_code = status_code
        super().__init__(message, **context)


class ApiAuthenticationError(ApiResponseError):
    """The token was missing, invalid or lacked the required capabilities."""

    def __init__(self, message: str = "API authentication failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


# =============================================================================
# Export Errors
# =============================================================================


class ExportError(NomadExportError):
    """Base exception for failures during the export traversal."""

    pass


class NamespaceListError(ExportError):
    """Listing the cluster's namespaces failed."""

    pass


class JobListError(ExportError):
    """Listing the jobs of one namespace failed."""

    def __init__(self, message: str, *, namespace: str, **context: Any) -> None:
        self.namespace = namespace
        super().__init__(message, namespace=namespace, **context)


class JobFetchError(ExportError):
    """Fetching the full definition of one job failed."""

    def __init__(
        self,
        message: str,
        *,
        namespace: str,
        job_id: str,
        job_name: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.namespace = namespace
        self.job_id = job_id
        if job_name:
            context["job_name"] = job_name
        super().__init__(message, namespace=namespace, job_id=job_id, **context)


class InvalidRecordError(ExportError):
    """A record returned by the API is missing the field it is indexed by."""

    def __init__(
        self,
        message: str = "Record is missing its key field",
        *,
        field: Optional[str] = None,
        **context: Any,
    ) -> None:
        if field:
            context["field"] = field
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(NomadExportError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)


class InvalidExclusionError(ConfigurationError):
    """An exclusion category outside the known vocabulary was requested."""

    def __init__(self, value: str, allowed: Iterable[str]) -> None:
        self.value = value
        self.allowed = sorted(allowed)
        super().__init__(
            f'Value "{value}" is not allowed. Allowed values are: {", ".join(self.allowed)}'
        )


# =============================================================================
# File Operation Errors
# =============================================================================


class FileOperationError(NomadExportError):
    """Base exception for file operations."""

    pass


class FileWriteError(FileOperationError):
    """Failed to write to a file."""

    def __init__(
        self,
        message: str = "Failed to write file",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, **context)
