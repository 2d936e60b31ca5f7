"""Shared type definitions for nomad-export.

Records coming back from the Nomad API are kept as the decoded JSON objects
and threaded through the export untouched.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

# Opaque JSON objects as returned by the API
NamespaceRecord = Dict[str, Any]
JobStub = Dict[str, Any]
JobRecord = Dict[str, Any]


@runtime_checkable
class OrchestratorClient(Protocol):
    """Read-only capabilities the exporter needs from an orchestrator client."""

    def list_namespaces(self) -> List[NamespaceRecord]:
        """List every namespace in the cluster."""
        ...

    def list_jobs(self, namespace: str) -> List[JobStub]:
        """List the job stubs in one namespace."""
        ...

    def get_job(self, job_id: str, namespace: str) -> JobRecord:
        """Fetch the full definition of one job."""
        ...
