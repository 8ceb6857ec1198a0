"""Shared test fixtures for genomeapi tests."""

import os

import pytest

from genomeapi import tools as _tools_module
from genomeapi.config import GenomeApiConfig

ANALYZE_URL = "https://analysis.example.test/analyze_variant"


@pytest.fixture(autouse=True)
def _reset_client_singletons():
    """Reset module-level client singletons between tests."""
    yield
    _tools_module._api_client = None


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any GENOMEAPI_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("GENOMEAPI_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config():
    """Config with an analysis endpoint and in-memory session store."""
    return GenomeApiConfig(analyze_variant_url=ANALYZE_URL, database_url="sqlite://")
