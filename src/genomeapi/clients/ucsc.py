"""UCSC Genome Browser REST API client: genome list, chromosomes, DNA sequence."""

from __future__ import annotations

import logging

import httpx

from ..constants import (
    DEFAULT_ORGANISM,
    NO_SEQUENCE_ERROR,
    SEQUENCE_INTERNAL_ERROR,
    UCSC_CHROMOSOMES_URL,
    UCSC_GENOMES_URL,
    UCSC_SEQUENCE_URL,
)
from ..errors import RequestError
from ..models import Chromosome, GenomeAssembly, SequenceRange, SequenceResult
from ..normalize import ensure_chr_prefix, sort_chromosomes
from .http import get_json

logger = logging.getLogger(__name__)


class UCSCClient:
    """Stateless client for api.genome.ucsc.edu.

    Every call opens its own HTTP connection; no state is kept between calls.
    """

    def __init__(self, timeout: float | None = None):
        """Initialize the UCSC client.

        Args:
            timeout: HTTP request timeout in seconds, None for no timeout.
        """
        self.timeout = timeout

    async def list_genomes(self) -> dict[str, list[GenomeAssembly]]:
        """Fetch all UCSC genome builds grouped by organism.

        Genomes without an organism land in the ``"Other"`` bucket. Within a
        bucket the upstream iteration order is kept.

        Raises:
            RequestError: If the request fails or ``ucscGenomes`` is missing.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            data = await get_json(
                client, UCSC_GENOMES_URL, None, "Failed to fetch genome list from UCSC API"
            )

        genomes = data.get("ucscGenomes") if isinstance(data, dict) else None
        if not isinstance(genomes, dict):
            raise RequestError("UCSC API error: missing ucscGenomes", url=UCSC_GENOMES_URL)

        grouped: dict[str, list[GenomeAssembly]] = {}
        for genome_id, info in genomes.items():
            if not isinstance(info, dict):
                info = {}
            organism = info.get("organism") or DEFAULT_ORGANISM
            grouped.setdefault(organism, []).append(
                GenomeAssembly(
                    id=genome_id,
                    name=info.get("description") or genome_id,
                    source_name=info.get("sourceName") or genome_id,
                    active=bool(info.get("active")),
                )
            )
        return grouped

    async def list_chromosomes(self, genome_id: str) -> list[Chromosome]:
        """Fetch the primary chromosomes of a genome in karyotype order.

        Raises:
            RequestError: If the request fails or ``chromosomes`` is missing.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            data = await get_json(
                client,
                UCSC_CHROMOSOMES_URL,
                {"genome": genome_id},
                "Failed to fetch chromosome list from UCSC API",
            )

        sizes = data.get("chromosomes") if isinstance(data, dict) else None
        if not isinstance(sizes, dict):
            raise RequestError("UCSC API error: missing chromosomes", url=UCSC_CHROMOSOMES_URL)

        chromosomes = [
            Chromosome(
                name=name,
                size=size if isinstance(size, int) and not isinstance(size, bool) else None,
            )
            for name, size in sizes.items()
        ]
        return sort_chromosomes(chromosomes)

    async def get_sequence(
        self, chrom: str, start: int, end: int, genome_id: str
    ) -> SequenceResult:
        """Fetch the DNA for a 1-based inclusive range.

        UCSC expects 0-based half-open coordinates, so only ``start`` is
        shifted. Never raises: failures return an empty sequence with the
        requested range echoed and an error message.

        Args:
            chrom: Chromosome, with or without ``chr`` prefix.
            start: 1-based start position.
            end: 1-based inclusive end position.
            genome_id: UCSC genome id (e.g. ``"hg38"``).
        """
        actual_range = SequenceRange(start=start, end=end)
        params = {
            "genome": genome_id,
            "chrom": ensure_chr_prefix(chrom, keep_empty=False),
            "start": start - 1,
            "end": end,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(UCSC_SEQUENCE_URL, params=params)
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "UCSC sequence fetch failed for %s:%d-%d (%s): %s", chrom, start, end, genome_id, e
            )
            return SequenceResult(
                sequence="", actual_range=actual_range, error=SEQUENCE_INTERNAL_ERROR
            )

        if not isinstance(data, dict):
            return SequenceResult(sequence="", actual_range=actual_range, error=NO_SEQUENCE_ERROR)

        error = data.get("error")
        dna = data.get("dna")
        if error or not dna or not isinstance(dna, str):
            return SequenceResult(
                sequence="",
                actual_range=actual_range,
                error=str(error) if error else NO_SEQUENCE_ERROR,
            )

        return SequenceResult(sequence=dna.upper(), actual_range=actual_range)
