"""MCP tool handlers for genomeapi."""

from __future__ import annotations

import json
import logging
from typing import Any

from .api import GenomeApiClient
from .config import GenomeApiConfig
from .errors import RequestError
from .models import ClinvarVariant, GeneBounds
from .serialization import (
    serialize_analysis,
    serialize_chromosomes,
    serialize_gene_details,
    serialize_gene_search,
    serialize_genomes,
    serialize_sequence,
    serialize_variant,
    serialize_variants,
)
from .validation import (
    validate_chrom,
    validate_genome_id,
    validate_query,
    validate_range,
    validate_variant_input,
)

logger = logging.getLogger(__name__)

# Module-level singleton so every tool call shares one configured client
_api_client: GenomeApiClient | None = None

_CLINVAR_DISCLAIMER = (
    "Note: This is research-grade information from ClinVar and is not intended "
    "for clinical diagnostic use."
)


def get_api_client(config: GenomeApiConfig) -> GenomeApiClient:
    """Get or create the singleton GenomeApiClient."""
    global _api_client
    if _api_client is None:
        _api_client = GenomeApiClient(config)
    return _api_client


def _text(payload: dict) -> dict:
    return {"content": [{"type": "text", "text": json.dumps(payload)}]}


def _error(message: str, **extra: Any) -> dict:
    return _text({"error": message, **extra})


async def handle_list_genomes(args: dict[str, Any], config: GenomeApiConfig) -> dict:
    """List UCSC genome builds grouped by organism."""
    client = get_api_client(config)
    try:
        genomes = await client.get_available_genomes()
    except RequestError as e:
        logger.warning("Genome list failed: %s", e)
        return _error(str(e))
    return _text(serialize_genomes(genomes))


async def handle_list_chromosomes(args: dict[str, Any], config: GenomeApiConfig) -> dict:
    genome_id = args["genome_id"]
    validation_error = validate_genome_id(genome_id)
    if validation_error:
        return _error(validation_error)

    client = get_api_client(config)
    try:
        chromosomes = await client.get_genome_chromosomes(genome_id)
    except RequestError as e:
        logger.warning("Chromosome list failed for %s: %s", genome_id, e)
        return _error(str(e))
    return _text(serialize_chromosomes(chromosomes))


async def handle_search_genes(args: dict[str, Any], config: GenomeApiConfig) -> dict:
    query = args["query"]
    genome = args["genome"]
    validation_error = validate_query(query) or validate_genome_id(genome)
    if validation_error:
        return _error(validation_error)

    client = get_api_client(config)
    try:
        response = await client.search_genes(query, genome)
    except RequestError as e:
        logger.warning("Gene search failed for %r: %s", query, e)
        return _error(str(e))
    return _text(serialize_gene_search(response))


async def handle_get_gene_details(args: dict[str, Any], config: GenomeApiConfig) -> dict:
    """Fetch gene details; an unknown gene yields all-null fields, not an error."""
    gene_id = str(args["gene_id"])
    if not gene_id.isdigit():
        return _error(f"Invalid NCBI gene id: {gene_id}")

    client = get_api_client(config)
    result = await client.fetch_gene_details(gene_id)
    return _text(serialize_gene_details(result))


async def handle_get_gene_sequence(args: dict[str, Any], config: GenomeApiConfig) -> dict:
    chrom = args["chrom"]
    start = args["start"]
    end = args["end"]
    genome_id = args["genome_id"]

    validation_error = (
        validate_chrom(chrom) or validate_range(start, end) or validate_genome_id(genome_id)
    )
    if validation_error:
        return _error(validation_error)

    client = get_api_client(config)
    result = await client.fetch_gene_sequence(chrom, start, end, genome_id)
    return _text(serialize_sequence(result))


async def handle_get_clinvar_variants(args: dict[str, Any], config: GenomeApiConfig) -> dict:
    """Fetch ClinVar variants inside a gene's bounds.

    The bounds may be given in either order; they are normalized downstream.
    """
    chrom = args["chrom"]
    genome_id = args["genome_id"]
    validation_error = validate_chrom(chrom) or validate_genome_id(genome_id)
    if validation_error:
        return _error(validation_error, disclaimer=_CLINVAR_DISCLAIMER)

    bounds = GeneBounds(min=args["min"], max=args["max"])

    client = get_api_client(config)
    try:
        variants = await client.fetch_clinvar_variants(chrom, bounds, genome_id)
    except RequestError as e:
        logger.warning(
            "ClinVar search failed for %s:%d-%d: %s", chrom, bounds.min, bounds.max, e
        )
        return _error(str(e), disclaimer=_CLINVAR_DISCLAIMER)

    payload = serialize_variants(variants)
    payload["disclaimer"] = _CLINVAR_DISCLAIMER
    return _text(payload)


async def handle_analyze_variant(args: dict[str, Any], config: GenomeApiConfig) -> dict:
    position = args["position"]
    alternative = args["alternative"]
    genome_id = args["genome_id"]
    chromosome = args["chromosome"]

    validation_error = validate_variant_input(chromosome, position, alternative, genome_id)
    if validation_error:
        return _error(validation_error)

    client = get_api_client(config)
    try:
        result = await client.analyze_variant_with_api(
            position=position,
            alternative=alternative.upper(),
            genome_id=genome_id,
            chromosome=chromosome,
        )
    except RequestError as e:
        logger.warning(
            "Variant analysis failed for %s:%d>%s: %s", chromosome, position, alternative, e
        )
        return _error(str(e))
    return _text(serialize_analysis(result))


async def handle_analyze_clinvar_variant(args: dict[str, Any], config: GenomeApiConfig) -> dict:
    """Analyze a ClinVar record previously returned by get_clinvar_variants."""
    genome_id = args["genome_id"]
    validation_error = validate_genome_id(genome_id)
    if validation_error:
        return _error(validation_error)

    variant = ClinvarVariant(
        clinvar_id=str(args["clinvar_id"]),
        title=args.get("title", ""),
        variation_type=args.get("variation_type", ""),
        classification=args.get("classification", ""),
        gene_sort=args.get("gene_sort", ""),
        chromosome=args["chromosome"],
        location=args["location"],
    )

    client = get_api_client(config)
    analyzed = await client.analyze_clinvar_variant(variant, genome_id)
    return _text(serialize_variant(analyzed))
