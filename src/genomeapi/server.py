"""MCP server setup for genomeapi using FastMCP."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from .config import GenomeApiConfig
from .tools import (
    handle_analyze_clinvar_variant,
    handle_analyze_variant,
    handle_get_clinvar_variants,
    handle_get_gene_details,
    handle_get_gene_sequence,
    handle_list_chromosomes,
    handle_list_genomes,
    handle_search_genes,
)


def create_server(config: GenomeApiConfig | None = None) -> FastMCP:
    """Create and configure the genomeapi MCP server."""
    if config is None:
        config = GenomeApiConfig.from_env()

    kwargs: dict = {
        "name": "genomeapi",
        "host": config.host,
        "port": config.port,
    }

    if config.auth_enabled:
        from .middleware.auth import GenomeApiAuthProvider, build_auth_settings
        from .middleware.sessions import SessionPolicy, SessionStore

        kwargs["auth_server_provider"] = GenomeApiAuthProvider(
            store=SessionStore(config.database_url),
            policy=SessionPolicy.from_config(config),
        )
        kwargs["auth"] = build_auth_settings(config)

    mcp = FastMCP(**kwargs)

    # -- Tools ---------------------------------------------------------------
    # Thin wrappers delegate to the handlers in tools.py.
    # FastMCP derives the JSON-Schema from the function signature.

    @mcp.tool(description="List UCSC genome assemblies grouped by organism")
    async def list_genomes() -> str:
        result = await handle_list_genomes({}, config)
        return str(result["content"][0]["text"])

    @mcp.tool(
        description=(
            "List the primary chromosomes of a UCSC genome (e.g. hg38) with sizes, "
            "in karyotype order. Unplaced, alternate and random contigs are omitted."
        ),
    )
    async def list_chromosomes(genome_id: str) -> str:
        result = await handle_list_chromosomes({"genome_id": genome_id}, config)
        return str(result["content"][0]["text"])

    @mcp.tool(
        description=(
            "Search NCBI genes by free text (symbol or name). "
            "Returns up to 30 matches with chromosome and NCBI gene id."
        ),
    )
    async def search_genes(query: str, genome: str = "hg38") -> str:
        result = await handle_search_genes({"query": query, "genome": genome}, config)
        return str(result["content"][0]["text"])

    @mcp.tool(
        description=(
            "Get NCBI gene details by gene id: genomic placement, summary, organism, "
            "gene bounds and an initial viewing range of at most 10,000 bases."
        ),
    )
    async def get_gene_details(gene_id: str) -> str:
        result = await handle_get_gene_details({"gene_id": gene_id}, config)
        return str(result["content"][0]["text"])

    @mcp.tool(
        description="Get the reference DNA sequence for a 1-based inclusive range",
    )
    async def get_gene_sequence(chrom: str, start: int, end: int, genome_id: str = "hg38") -> str:
        result = await handle_get_gene_sequence(
            {"chrom": chrom, "start": start, "end": end, "genome_id": genome_id},
            config,
        )
        return str(result["content"][0]["text"])

    @mcp.tool(
        description=(
            "List ClinVar variants (up to 20) within gene bounds on a chromosome. "
            "Research-grade information, not for clinical use."
        ),
    )
    async def get_clinvar_variants(
        chrom: str,
        gene_min: int,
        gene_max: int,
        genome_id: str = "hg38",
    ) -> str:
        result = await handle_get_clinvar_variants(
            {"chrom": chrom, "min": gene_min, "max": gene_max, "genome_id": genome_id},
            config,
        )
        return str(result["content"][0]["text"])

    @mcp.tool(
        description="Predict the effect of a single nucleotide variant with the analysis service",
    )
    async def analyze_variant(
        position: int,
        alternative: str,
        chromosome: str,
        genome_id: str = "hg38",
    ) -> str:
        result = await handle_analyze_variant(
            {
                "position": position,
                "alternative": alternative,
                "genome_id": genome_id,
                "chromosome": chromosome,
            },
            config,
        )
        return str(result["content"][0]["text"])

    @mcp.tool(
        description=(
            "Predict the effect of a ClinVar single nucleotide variant returned by "
            "get_clinvar_variants, using its title and location"
        ),
    )
    async def analyze_clinvar_variant(
        clinvar_id: str,
        title: str,
        chromosome: str,
        location: str,
        genome_id: str = "hg38",
    ) -> str:
        result = await handle_analyze_clinvar_variant(
            {
                "clinvar_id": clinvar_id,
                "title": title,
                "chromosome": chromosome,
                "location": location,
                "genome_id": genome_id,
            },
            config,
        )
        return str(result["content"][0]["text"])

    return mcp
