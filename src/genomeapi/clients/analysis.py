"""Client for the single-variant effect analysis service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import RequestError
from ..models import AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisClient:
    """POSTs single-nucleotide variants to the configured analysis endpoint.

    No retry; the request timeout defaults to none.
    """

    def __init__(self, url: str | None, timeout: float | None = None):
        """Initialize the analysis client.

        Args:
            url: Analysis endpoint URL. Calls raise RequestError while unset.
            timeout: HTTP request timeout in seconds, None for no timeout.
        """
        self.url = url
        self.timeout = timeout

    async def analyze(
        self, position: int, alternative: str, genome_id: str, chromosome: str
    ) -> AnalysisResult:
        """Score one variant.

        Args:
            position: 1-based genomic position.
            alternative: Alternate base.
            genome_id: UCSC genome id (e.g. ``"hg38"``).
            chromosome: Chromosome name as the service expects it.

        Raises:
            RequestError: If the endpoint is unconfigured, unreachable or
                returns a non-success status (the body text is included).
        """
        if not self.url:
            raise RequestError("Variant analysis endpoint is not configured")

        payload = {
            "variant_position": position,
            "alternative": alternative,
            "genome": genome_id,
            "chromosome": chromosome,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            raise RequestError(f"Failed to analyze variant {e}", url=self.url) from e

        if not resp.is_success:
            logger.warning("Variant analysis returned HTTP %d", resp.status_code)
            raise RequestError(
                f"Failed to analyze variant {resp.text}",
                status_code=resp.status_code,
                url=self.url,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise RequestError(
                "Failed to analyze variant: invalid JSON response", url=self.url
            ) from e

        return _parse_result(data)


def _parse_result(data: Any) -> AnalysisResult:
    """Map the service's JSON body onto AnalysisResult without reinterpreting values."""
    if not isinstance(data, dict):
        raise RequestError("Failed to analyze variant: unexpected response body")

    return AnalysisResult(
        position=data.get("position"),
        reference=data.get("reference"),
        alternative=data.get("alternative"),
        delta_score=data.get("delta_score"),
        prediction=data.get("prediction"),
        classification_confidence=data.get("classification_confidence"),
    )
