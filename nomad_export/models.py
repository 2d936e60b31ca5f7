"""Value types making up an export document.

The document is a two level mapping: namespace name -> NamespaceEntry,
then job ID -> JobEntry. Entries are frozen and their mappings are read-only
views, so a finished document can be handed out as a snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .types import JobRecord, JobStub, NamespaceRecord


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class JobEntry:
    """A job's list stub alongside its full definition."""

    info: Optional[JobStub] = None
    definition: Optional[JobRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.info is not None:
            out["info"] = self.info
        if self.definition is not None:
            out["definition"] = self.definition
        return out


@dataclass(frozen=True)
class NamespaceEntry:
    """A namespace record and the jobs exported from it, keyed by job ID."""

    definition: Optional[NamespaceRecord] = None
    jobs: Mapping[str, JobEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "jobs", _freeze(self.jobs))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.definition is not None:
            out["definition"] = self.definition
        if self.jobs:
            out["jobs"] = {job_id: self.jobs[job_id].to_dict() for job_id in sorted(self.jobs)}
        return out


@dataclass(frozen=True)
class ExportDocument:
    """Snapshot of every namespace and its jobs, keyed by namespace name."""

    namespaces: Mapping[str, NamespaceEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "namespaces", _freeze(self.namespaces))

    @property
    def job_count(self) -> int:
        return sum(len(ns.jobs) for ns in self.namespaces.values())

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form, leaving out empty or absent fields.

        Namespaces and jobs are emitted in key order so that two exports of
        an unchanged cluster serialize identically.
        """
        out: Dict[str, Any] = {}
        if self.namespaces:
            out["namespaces"] = {
                name: self.namespaces[name].to_dict() for name in sorted(self.namespaces)
            }
        return out
