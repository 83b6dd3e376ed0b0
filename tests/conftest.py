"""Pytest configuration and fixtures for the metric-thresholds tests."""

import pytest


@pytest.fixture
def thresholds_config() -> dict:
    """A thresholds mapping mixing bare and long-form definitions."""
    return {
        "http_req_duration": [
            "p(95)<200",
            {"threshold": "p(99.9)<500", "abortOnFail": True, "delayAbortEval": "10s"},
        ],
        "http_req_failed": "rate<0.01",
        "http_reqs{status:200}": ["count>100"],
    }


@pytest.fixture
def metric_types() -> dict:
    return {
        "http_req_duration": "trend",
        "http_req_failed": "rate",
        "http_reqs": "counter",
    }
