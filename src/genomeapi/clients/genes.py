"""Gene lookup via the NCBI clinical-tables search service and NCBI Entrez.

Provides free-text gene search and gene summary retrieval with derived
genomic bounds.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import httpx

from ..constants import (
    EUTILS_ESUMMARY_URL,
    GENE_SEARCH_FIELDS,
    GENE_SEARCH_URL,
    MAX_GENE_SEARCH_RESULTS,
    MIN_GENE_RECORD_FIELDS,
)
from ..models import (
    GeneDetails,
    GeneDetailsResult,
    GeneSearchResponse,
    GeneSearchResult,
    GenomicInfo,
    Organism,
)
from ..normalize import ensure_chr_prefix, gene_bounds, initial_range
from .http import get_json

logger = logging.getLogger(__name__)


class GeneClient:
    """NCBI gene search and summary client.

    The search endpoint returns a positional array
    ``[total, terms, extra_fields, records]`` where each record is a list of
    the requested display fields in order.
    """

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        """Initialize the gene client.

        Args:
            api_key: NCBI API key for higher e-utilities rate limits.
            timeout: HTTP request timeout in seconds, None for no timeout.
        """
        self.api_key = api_key
        self.timeout = timeout

    async def search(self, query: str, genome: str) -> GeneSearchResponse:
        """Free-text gene search.

        Malformed records are skipped; at most ``min(30, total)`` records are
        inspected.

        Args:
            query: Search text (symbol, name fragment, ...).
            genome: Genome id, echoed back for caller correlation.

        Raises:
            RequestError: If the HTTP request fails.
        """
        params = {
            "terms": query,
            "df": GENE_SEARCH_FIELDS,
            "ef": GENE_SEARCH_FIELDS,
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            data = await get_json(client, GENE_SEARCH_URL, params, "NCBI API error")

        return GeneSearchResponse(query=query, genome=genome, results=tuple(_parse_search(data)))

    async def get_details(self, gene_id: str) -> GeneDetailsResult:
        """Fetch a gene summary and derive its bounds and initial viewing range.

        Never raises: any failure returns a GeneDetailsResult with all fields
        None.
        """
        params: dict = {"db": "gene", "id": gene_id, "retmode": "json"}
        if self.api_key:
            params["api_key"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(EUTILS_ESUMMARY_URL, params=params)
                if not resp.is_success:
                    logger.warning(
                        "Failed to fetch gene details for %s: %s", gene_id, resp.reason_phrase
                    )
                    return GeneDetailsResult()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to fetch gene details for %s: %s", gene_id, e)
            return GeneDetailsResult()

        return _parse_details(data, gene_id)


def _parse_search(data: Any) -> list[GeneSearchResult]:
    """Parse the clinical-tables positional array, failing closed on bad shape."""
    if not isinstance(data, list) or len(data) < 4:
        logger.debug("Gene search: unexpected response shape")
        return []

    total, records = data[0], data[3]
    if not isinstance(total, int) or isinstance(total, bool) or total <= 0:
        return []
    if not isinstance(records, list):
        return []

    results: list[GeneSearchResult] = []
    for record in records[: min(MAX_GENE_SEARCH_RESULTS, total)]:
        if not isinstance(record, list) or len(record) < MIN_GENE_RECORD_FIELDS:
            logger.debug("Gene search: skipping malformed record %r", record)
            continue

        chrom = str(record[0] or "")
        symbol = str(record[1] or "")
        name = str(record[2] or "")
        map_location = record[3]
        gene_id = record[6]

        results.append(
            GeneSearchResult(
                symbol=symbol,
                name=name,
                chrom=ensure_chr_prefix(chrom),
                description=f"{name} ({map_location})",
                gene_id=str(gene_id) if gene_id is not None else "",
            )
        )
    return results


def _is_number(value: Any) -> bool:
    # resp.json() decodes NaN and Infinity, which cannot become coordinates
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _has_coordinates(info: Any) -> bool:
    return (
        isinstance(info, dict)
        and _is_number(info.get("chrstart"))
        and _is_number(info.get("chrstop"))
    )


def _parse_details(data: Any, gene_id: str) -> GeneDetailsResult:
    """Parse an esummary gene response into details, bounds and initial range."""
    result = data.get("result") if isinstance(data, dict) else None
    detail = result.get(gene_id) if isinstance(result, dict) else None
    if not isinstance(detail, dict):
        return GeneDetailsResult()

    raw_info = detail.get("genomicinfo")
    if not isinstance(raw_info, list) or not raw_info:
        return GeneDetailsResult()

    # Bounds come from the first entry only, so it must be well formed
    if not _has_coordinates(raw_info[0]):
        return GeneDetailsResult()

    genomic_info = tuple(
        GenomicInfo(
            chr_start=int(info["chrstart"]),
            chr_stop=int(info["chrstop"]),
            strand=info.get("strand"),
        )
        for info in raw_info
        if _has_coordinates(info)
    )

    organism = None
    raw_organism = detail.get("organism")
    if isinstance(raw_organism, dict):
        organism = Organism(
            scientific_name=raw_organism.get("scientificname", ""),
            common_name=raw_organism.get("commonname", ""),
        )

    details = GeneDetails(
        genomic_info=genomic_info,
        summary=detail.get("summary"),
        organism=organism,
    )
    bounds = gene_bounds(genomic_info[0].chr_start, genomic_info[0].chr_stop)
    return GeneDetailsResult(
        gene_details=details,
        gene_bounds=bounds,
        initial_range=initial_range(bounds),
    )
