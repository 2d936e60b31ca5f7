"""Export engine: walks namespaces and jobs and assembles the export document.

The traversal is sequential and all-or-nothing. Namespaces are listed, then
for each one its jobs are listed and every job definition is fetched, in the
order the client returns them. The first failing call aborts the whole run
with an ExportError naming where it happened; no partial document is ever
returned.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .config.constants import JOB_KEY_FIELD, JOB_NAME_FIELD, NAMESPACE_KEY_FIELD
from .exceptions import (
    InvalidRecordError,
    JobFetchError,
    JobListError,
    NamespaceListError,
)
from .exclusions import ExclusionSet
from .models import ExportDocument, JobEntry, NamespaceEntry
from .types import JobStub, NamespaceRecord, OrchestratorClient

logger = logging.getLogger(__name__)


def _record_key(record: Mapping, field: str, kind: str, **context: str) -> str:
    key = record.get(field)
    if not isinstance(key, str) or not key:
        raise InvalidRecordError(f"{kind} record has no {field}", field=field, **context)
    return key


class Exporter:
    """Builds an ExportDocument from an orchestrator client.

    Constructing an exporter makes no requests. The exclusion set is carried
    for callers to inspect; it does not currently skip any fetch.
    """

    def __init__(
        self,
        client: OrchestratorClient,
        exclusions: Optional[ExclusionSet] = None,
    ) -> None:
        self.client = client
        self.exclusions = exclusions if exclusions is not None else ExclusionSet()

    def export(self) -> ExportDocument:
        """Run one full export.

        Raises:
            NamespaceListError: Listing namespaces failed.
            JobListError: Listing a namespace's jobs failed.
            JobFetchError: Fetching a job definition failed.
            InvalidRecordError: A record lacked the field it is keyed by.
        """
        logger.info("Starting export")
        if self.exclusions:
            logger.debug("Excluded data types: %s", self.exclusions)

        document = ExportDocument(namespaces=self._export_namespaces())

        logger.info(
            "Exported %d namespaces and %d jobs",
            len(document.namespaces),
            document.job_count,
        )
        return document

    def _export_namespaces(self) -> Dict[str, NamespaceEntry]:
        try:
            namespaces = self.client.list_namespaces()
        except Exception as e:
            raise NamespaceListError(f"error listing namespaces: {e}") from e

        return dict(self._export_namespace(ns) for ns in namespaces)

    def _export_namespace(self, namespace: NamespaceRecord) -> Tuple[str, NamespaceEntry]:
        name = _record_key(namespace, NAMESPACE_KEY_FIELD, "Namespace")
        logger.debug("Exporting namespace %s", name)
        return name, NamespaceEntry(definition=namespace, jobs=self._export_jobs(name))

    def _export_jobs(self, namespace: str) -> Dict[str, JobEntry]:
        try:
            jobs = self.client.list_jobs(namespace)
        except Exception as e:
            raise JobListError(
                f"error listing jobs for namespace {namespace}: {e}", namespace=namespace
            ) from e

        return dict(self._export_job(job, namespace) for job in jobs)

    def _export_job(self, job: JobStub, namespace: str) -> Tuple[str, JobEntry]:
        job_id = _record_key(job, JOB_KEY_FIELD, "Job", namespace=namespace)
        job_name = job.get(JOB_NAME_FIELD)
        label = f"{job_name} ({job_id})" if job_name else job_id
        logger.debug("Fetching job %s in namespace %s", label, namespace)

        try:
            definition = self.client.get_job(job_id, namespace)
        except Exception as e:
            raise JobFetchError(
                f"error getting job {label} definition in namespace {namespace}: {e}",
                namespace=namespace,
                job_id=job_id,
                job_name=job_name,
            ) from e

        return job_id, JobEntry(info=job, definition=definition)


def export(
    client: OrchestratorClient,
    exclude: Optional[Iterable[str]] = None,
) -> ExportDocument:
    """Validate the exclusions and run a single export with `client`."""
    exclusions = exclude if isinstance(exclude, ExclusionSet) else ExclusionSet(exclude)
    return Exporter(client, exclusions).export()
