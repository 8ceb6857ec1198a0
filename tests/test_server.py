"""Unit tests for genomeapi.server module."""

import pytest

from genomeapi.config import GenomeApiConfig
from genomeapi.server import create_server

EXPECTED_TOOLS = {
    "list_genomes",
    "list_chromosomes",
    "search_genes",
    "get_gene_details",
    "get_gene_sequence",
    "get_clinvar_variants",
    "analyze_variant",
    "analyze_clinvar_variant",
}


class TestCreateServer:
    """Tests for the create_server function."""

    @pytest.mark.unit
    def test_creates_server(self):
        server = create_server(GenomeApiConfig())
        assert server is not None
        assert server.name == "genomeapi"

    @pytest.mark.unit
    def test_creates_server_default_config(self, clean_env):
        """Should create server with default config from env."""
        server = create_server()
        assert server.name == "genomeapi"

    @pytest.mark.unit
    def test_server_registers_tools(self):
        server = create_server(GenomeApiConfig())
        tool_names = set(server._tool_manager._tools)
        assert tool_names == EXPECTED_TOOLS

    @pytest.mark.unit
    def test_server_with_auth(self):
        """Server created with auth should have an auth provider."""
        config = GenomeApiConfig(
            auth_enabled=True,
            issuer_url="http://localhost:8000",
            resource_server_url="http://localhost:8000",
            database_url="sqlite://",
        )
        server = create_server(config)
        assert server._auth_server_provider is not None

    @pytest.mark.unit
    def test_server_without_auth(self):
        server = create_server(GenomeApiConfig(auth_enabled=False))
        assert server._auth_server_provider is None

    @pytest.mark.unit
    def test_server_host_port(self):
        """Server should use config host and port."""
        config = GenomeApiConfig(host="127.0.0.1", port=9000)
        server = create_server(config)
        assert server.settings.host == "127.0.0.1"
        assert server.settings.port == 9000
