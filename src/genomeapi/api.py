"""GenomeApiClient: one entry point for every upstream genomics call.

Each method wraps a single request (ClinVar: two sequential requests) and
returns typed records. Two error policies apply, by operation:

- ``get_available_genomes``, ``get_genome_chromosomes``, ``search_genes``,
  ``fetch_clinvar_variants`` and ``analyze_variant_with_api`` raise
  :class:`~genomeapi.errors.RequestError`.
- ``fetch_gene_details`` and ``fetch_gene_sequence`` never raise; they return
  an empty result (with an error message for sequences).
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from .clients import AnalysisClient, ClinVarClient, GeneClient, UCSCClient
from .config import GenomeApiConfig
from .constants import UNKNOWN
from .errors import RequestError
from .models import (
    AnalysisResult,
    Chromosome,
    ClinvarVariant,
    Evo2Result,
    GeneBounds,
    GeneDetailsResult,
    GeneSearchResponse,
    GenomeAssembly,
    SequenceResult,
)
from .normalize import ensure_chr_prefix

logger = logging.getLogger(__name__)

_SNV_PATTERN = re.compile(r"([ACGT])>([ACGT])")


class GenomeApiClient:
    """Stateless facade over the UCSC, NCBI, ClinVar and analysis clients.

    Holds configuration only, so concurrent calls need no coordination.
    """

    def __init__(self, config: GenomeApiConfig | None = None):
        if config is None:
            config = GenomeApiConfig.from_env()
        self.config = config
        self._ucsc = UCSCClient(timeout=config.request_timeout)
        self._genes = GeneClient(api_key=config.ncbi_api_key, timeout=config.request_timeout)
        self._clinvar = ClinVarClient(api_key=config.ncbi_api_key, timeout=config.request_timeout)
        self._analysis = AnalysisClient(config.analyze_variant_url, timeout=config.request_timeout)

    async def get_available_genomes(self) -> dict[str, list[GenomeAssembly]]:
        """UCSC genome builds grouped by organism."""
        return await self._ucsc.list_genomes()

    async def get_genome_chromosomes(self, genome_id: str) -> list[Chromosome]:
        """Primary chromosomes of ``genome_id`` in karyotype order."""
        return await self._ucsc.list_chromosomes(genome_id)

    async def search_genes(self, query: str, genome: str) -> GeneSearchResponse:
        return await self._genes.search(query, genome)

    async def fetch_gene_details(self, gene_id: str) -> GeneDetailsResult:
        return await self._genes.get_details(gene_id)

    async def fetch_gene_sequence(
        self, chrom: str, start: int, end: int, genome_id: str
    ) -> SequenceResult:
        """DNA for the 1-based inclusive range ``[start, end]``."""
        return await self._ucsc.get_sequence(chrom, start, end, genome_id)

    async def fetch_clinvar_variants(
        self, chrom: str, gene_bound: GeneBounds, genome_id: str
    ) -> list[ClinvarVariant]:
        return await self._clinvar.variants_in_region(chrom, gene_bound, genome_id)

    async def analyze_variant_with_api(
        self, position: int, alternative: str, genome_id: str, chromosome: str
    ) -> AnalysisResult:
        return await self._analysis.analyze(position, alternative, genome_id, chromosome)

    async def analyze_clinvar_variant(
        self, variant: ClinvarVariant, genome_id: str
    ) -> ClinvarVariant:
        """Run the analysis service on a ClinVar SNV and attach the outcome.

        The alternate base comes from the ``X>Y`` change in the title and the
        position from the formatted location. Failures are recorded in
        ``evo2_error`` instead of being raised.
        """
        match = _SNV_PATTERN.search(variant.title)
        if match is None:
            return replace(
                variant,
                is_analyzing=False,
                evo2_error="Only single nucleotide variants can be analyzed",
            )

        position = parse_location(variant.location)
        if position is None:
            return replace(variant, is_analyzing=False, evo2_error="Variant position is unknown")

        try:
            result = await self.analyze_variant_with_api(
                position=position,
                alternative=match.group(2),
                genome_id=genome_id,
                chromosome=ensure_chr_prefix(variant.chromosome),
            )
        except RequestError as e:
            logger.warning("Analysis failed for ClinVar variant %s: %s", variant.clinvar_id, e)
            return replace(variant, is_analyzing=False, evo2_error=str(e))

        return replace(
            variant,
            is_analyzing=False,
            evo2_result=Evo2Result.from_analysis(result),
            evo2_error=None,
        )


def mark_analyzing(variant: ClinvarVariant) -> ClinvarVariant:
    """Copy of ``variant`` flagged as in-flight, with any previous outcome cleared."""
    return replace(variant, is_analyzing=True, evo2_result=None, evo2_error=None)


def parse_location(location: str) -> int | None:
    """Invert the thousands-separated ClinVar location; None when unknown."""
    if not location or location == UNKNOWN:
        return None
    digits = location.replace(",", "")
    return int(digits) if digits.isdigit() else None
