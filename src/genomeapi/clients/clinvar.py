"""ClinVar NCBI E-utilities API client for variants overlapping a gene."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..constants import (
    CLINVAR_MAX_RESULTS,
    CURRENT_POSITION_FIELD,
    EUTILS_ESEARCH_URL,
    EUTILS_ESUMMARY_URL,
    LEGACY_GENOME_BUILD,
    LEGACY_POSITION_FIELD,
    UNKNOWN,
)
from ..models import ClinvarVariant, GeneBounds
from ..normalize import format_location, strip_chr_prefix, title_case_words
from .http import get_json

logger = logging.getLogger(__name__)


class ClinVarClient:
    """Async client for NCBI E-utilities ClinVar region queries.

    A search is two sequential calls: esearch for variation IDs overlapping
    the region, then one batched esummary for all of them.
    """

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        self.api_key = api_key
        self.timeout = timeout

    async def variants_in_region(
        self, chrom: str, bounds: GeneBounds, genome_id: str
    ) -> list[ClinvarVariant]:
        """
        Fetch ClinVar variants overlapping a gene.

        Args:
            chrom: Chromosome (e.g., "chr17" or "17").
            bounds: Gene bounds to search within.
            genome_id: UCSC genome id; ``"hg19"`` searches GRCh37 positions,
                anything else GRCh38.

        Returns:
            Variants in esummary order; empty when the search finds nothing.

        Raises:
            RequestError: If either HTTP call fails.
        """
        chrom_bare = strip_chr_prefix(chrom)
        term = _build_search_term(chrom_bare, bounds, genome_id)

        params: dict[str, str | int] = {
            "db": "clinvar",
            "term": term,
            "retmode": "json",
            "retmax": CLINVAR_MAX_RESULTS,
        }
        if self.api_key:
            params["api_key"] = self.api_key

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            # Step 1: esearch to find variation IDs
            search_data = await get_json(
                client, EUTILS_ESEARCH_URL, params, "Clinvar search failed"
            )

            id_list = _id_list(search_data)
            if not id_list:
                logger.debug("ClinVar: no results for %s", term)
                return []

            # Step 2: esummary to get record details
            summary_params: dict[str, str | int] = {
                "db": "clinvar",
                "id": ",".join(str(i) for i in id_list),
                "retmode": "json",
            }
            if self.api_key:
                summary_params["api_key"] = self.api_key

            summary_data = await get_json(
                client, EUTILS_ESUMMARY_URL, summary_params, "Failed to fetch variant details"
            )

        return _parse_summary(summary_data, chrom_bare)


def _id_list(data: Any) -> list:
    search_result = data.get("esearchresult") if isinstance(data, dict) else None
    id_list = search_result.get("idlist") if isinstance(search_result, dict) else None
    return id_list if isinstance(id_list, list) else []


def _position_field(genome_id: str) -> str:
    return LEGACY_POSITION_FIELD if genome_id == LEGACY_GENOME_BUILD else CURRENT_POSITION_FIELD


def _build_search_term(chrom: str, bounds: GeneBounds, genome_id: str) -> str:
    """Build a ClinVar search term for a chromosome interval."""
    low = min(bounds.min, bounds.max)
    high = max(bounds.min, bounds.max)
    return f"{chrom}[chromosome] AND {low}:{high}[{_position_field(genome_id)}]"


def _parse_summary(data: Any, chromosome: str) -> list[ClinvarVariant]:
    """Parse an esummary response into ClinvarVariant records."""
    result_section = data.get("result") if isinstance(data, dict) else None
    if not isinstance(result_section, dict):
        return []

    uids = result_section.get("uids")
    if not isinstance(uids, list):
        return []

    variants: list[ClinvarVariant] = []
    for uid in uids:
        entry = result_section.get(str(uid))
        if not isinstance(entry, dict):
            continue

        germline = entry.get("germline_classification")
        classification = germline.get("description") if isinstance(germline, dict) else None

        variants.append(
            ClinvarVariant(
                clinvar_id=str(uid),
                title=entry.get("title") or "",
                variation_type=title_case_words(entry.get("obj_type") or UNKNOWN),
                classification=classification or UNKNOWN,
                gene_sort=entry.get("gene_sort") or "",
                chromosome=chromosome,
                location=format_location(entry.get("location_sort")),
            )
        )
    return variants
