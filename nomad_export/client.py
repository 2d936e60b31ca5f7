"""Nomad HTTP API client.

A thin read-only wrapper around a requests.Session exposing the three calls
the exporter needs. Every failure is raised as an ApiError subclass; records
are returned exactly as the API decoded them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter

from .config.constants import JOB_PATH, JOBS_PATH, NAMESPACES_PATH, TOKEN_HEADER
from .config.settings import ClientSettings
from .exceptions import ApiAuthenticationError, ApiConnectionError, ApiResponseError
from .types import JobRecord, JobStub, NamespaceRecord

logger = logging.getLogger(__name__)


class ServerNameAdapter(HTTPAdapter):
    """Transport adapter that pins the TLS SNI/verification host name."""

    def __init__(self, server_hostname: str, **kwargs: Any) -> None:
        # init_poolmanager runs inside HTTPAdapter.__init__
        self.server_hostname = server_hostname
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["server_hostname"] = self.server_hostname
        super().init_poolmanager(*args, **kwargs)


class NomadClient:
    """Read-only client for the namespace and job endpoints of the Nomad API."""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.settings.validate()

        self.address = self.settings.address.rstrip("/")
        self.timeout = self.settings.timeout
        self._session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers["Accept"] = "application/json"

        token = self.settings.resolve_token()
        if token:
            session.headers[TOKEN_HEADER] = token

        session.verify = self.settings.verify
        session.cert = self.settings.cert

        if self.settings.tls_server_name:
            session.mount("https://", ServerNameAdapter(self.settings.tls_server_name))

        return session

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "NomadClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """Issue a GET and return the decoded JSON body."""
        url = f"{self.address}{path}"
        logger.debug("GET %s params=%s", url, params)

        try:
            resp = self._session.request("GET", url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ApiConnectionError(f"error connecting to Nomad: {e}", url=url) from e

        if resp.status_code in (401, 403):
            raise ApiAuthenticationError(
                f"Nomad rejected the request with status {resp.status_code}",
                url=url,
                status_code=resp.status_code,
                body=resp.text,
            )
        if not resp.ok:
            raise ApiResponseError(
                f"Nomad returned status {resp.status_code}",
                url=url,
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise ApiResponseError(
                "Nomad returned a body that is not valid JSON",
                url=url,
                status_code=resp.status_code,
                body=resp.text,
            ) from e

    def _get_list(self, path: str, params: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
        body = self._get(path, params)
        # Nomad answers an empty listing with null on some versions
        if body is None:
            return []
        if not isinstance(body, list) or not all(isinstance(item, dict) for item in body):
            raise ApiResponseError(
                f"Expected a list of objects, got {type(body).__name__}", url=f"{self.address}{path}"
            )
        return body

    def list_namespaces(self) -> List[NamespaceRecord]:
        return self._get_list(NAMESPACES_PATH)

    def list_jobs(self, namespace: str) -> List[JobStub]:
        return self._get_list(JOBS_PATH, {"namespace": namespace})

    def get_job(self, job_id: str, namespace: str) -> JobRecord:
        path = JOB_PATH.format(job_id=quote(job_id, safe=""))
        body = self._get(path, {"namespace": namespace})
        if not isinstance(body, dict):
            raise ApiResponseError(
                f"Expected a job object, got {type(body).__name__}", url=f"{self.address}{path}"
            )
        return body
