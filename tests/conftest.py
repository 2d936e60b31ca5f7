"""Shared pytest fixtures for nomad-export tests."""

import copy
import logging

import pytest

from nomad_export.exceptions import ApiConnectionError


class FakeNomadClient:
    """In-memory stand-in for NomadClient.

    Holds namespaces, job stubs per namespace and job definitions keyed by
    (namespace, job ID). Calls are recorded in `calls`; `fail_on` maps a call
    tuple to the exception that call should raise.
    """

    def __init__(self, namespaces=None, jobs=None, definitions=None):
        self.namespaces = namespaces or []
        self.jobs = jobs or {}
        self.definitions = definitions or {}
        self.fail_on = {}
        self.calls = []

    def _record(self, call):
        self.calls.append(call)
        if call in self.fail_on:
            raise self.fail_on[call]

    def list_namespaces(self):
        self._record(("list_namespaces",))
        return copy.deepcopy(self.namespaces)

    def list_jobs(self, namespace):
        self._record(("list_jobs", namespace))
        return copy.deepcopy(self.jobs.get(namespace, []))

    def get_job(self, job_id, namespace):
        self._record(("get_job", job_id, namespace))
        return copy.deepcopy(self.definitions[(namespace, job_id)])


def make_client():
    """Two namespaces: default with two jobs, batch with one."""
    return FakeNomadClient(
        namespaces=[
            {"Name": "default", "Description": "Default shared namespace", "Quota": ""},
            {"Name": "batch", "Description": "Batch workloads", "Meta": {"team": "data"}},
        ],
        jobs={
            "default": [
                {"ID": "job-1", "Name": "web", "Type": "service", "Status": "running"},
                {"ID": "job-2", "Name": "cache", "Type": "service", "Status": "pending"},
            ],
            "batch": [
                {"ID": "nightly", "Name": "nightly", "Type": "batch", "Status": "dead"},
            ],
        },
        definitions={
            ("default", "job-1"): {
                "ID": "job-1",
                "Name": "web",
                "Namespace": "default",
                "TaskGroups": [{"Name": "web", "Count": 3, "Tasks": [{"Name": "nginx", "Driver": "docker"}]}],
            },
            ("default", "job-2"): {
                "ID": "job-2",
                "Name": "cache",
                "Namespace": "default",
                "TaskGroups": [{"Name": "redis", "Count": 1}],
                "Meta": None,
            },
            ("batch", "nightly"): {
                "ID": "nightly",
                "Name": "nightly",
                "Namespace": "batch",
                "Periodic": {"Spec": "0 2 * * *"},
            },
        },
    )


@pytest.fixture
def fake_client():
    return make_client()


@pytest.fixture
def transport_error():
    return ApiConnectionError("error connecting to Nomad: connection refused", url="http://127.0.0.1:4646")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo whatever setup_logging() did to the package logger."""
    yield
    logger = logging.getLogger("nomad_export")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
