"""Response normalization helpers shared by the service clients.

Chromosome filtering and ordering, chromosome-prefix handling, display
formatting for ClinVar records, and gene bounds derivation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .constants import EXCLUDED_CHROMOSOME_MARKERS, INITIAL_RANGE_MAX_SPAN, UNKNOWN
from .models import Chromosome, GeneBounds, SequenceRange

_NUMERIC = re.compile(r"[0-9]+")
_LEADING_CHR = re.compile(r"^chr", re.IGNORECASE)
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def is_primary_chromosome(name: str) -> bool:
    """Return False for unplaced, alternate and random contigs.

    Case-sensitive substring match on ``_``, ``Un`` and ``random``.
    """
    return not any(marker in name for marker in EXCLUDED_CHROMOSOME_MARKERS)


def chromosome_sort_key(name: str) -> tuple[int, int, str]:
    """Sort key giving chr1, chr2, ..., chr10, ..., chrX, chrY, chrM order.

    Numeric names (after stripping a leading ``chr``) sort first in numeric
    order; everything else follows lexicographically.
    """
    bare = name[3:] if name.startswith("chr") else name
    if _NUMERIC.fullmatch(bare):
        return (0, int(bare), "")
    return (1, 0, bare)


def sort_chromosomes(chromosomes: Iterable[Chromosome]) -> list[Chromosome]:
    """Drop non-primary contigs and return the rest in karyotype order."""
    primary = [c for c in chromosomes if is_primary_chromosome(c.name)]
    return sorted(primary, key=lambda c: chromosome_sort_key(c.name))


def ensure_chr_prefix(chrom: str, keep_empty: bool = True) -> str:
    """Prefix ``chr`` unless already present (UCSC naming).

    An empty name stays empty unless ``keep_empty`` is False, in which case it
    becomes ``"chr"`` as sent on sequence requests.
    """
    if (chrom or not keep_empty) and not chrom.startswith("chr"):
        return f"chr{chrom}"
    return chrom


def strip_chr_prefix(chrom: str) -> str:
    """Remove a leading ``chr`` of any case (NCBI naming)."""
    return _LEADING_CHR.sub("", chrom)


def title_case_words(text: str) -> str:
    """Capitalize the first letter of each space-separated word, lowercase the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def format_location(location_sort: str | int | None) -> str:
    """Format a ClinVar ``location_sort`` value with thousands separators.

    Leading zeros and trailing garbage are ignored, as with integer parsing of
    the raw field. Missing or non-numeric values give ``"Unknown"``.
    """
    if location_sort is None or location_sort == "":
        return UNKNOWN
    match = _LEADING_INT.match(str(location_sort))
    if match is None:
        return UNKNOWN
    return f"{int(match.group(1)):,}"


def gene_bounds(chr_start: int, chr_stop: int) -> GeneBounds:
    """Order a gene's start/stop pair (reverse-strand genes report stop < start)."""
    return GeneBounds(min=min(chr_start, chr_stop), max=max(chr_start, chr_stop))


def initial_range(bounds: GeneBounds, max_span: int = INITIAL_RANGE_MAX_SPAN) -> SequenceRange:
    """Initial viewing window: the whole gene, capped at ``max_span`` bases from the start."""
    end = bounds.min + max_span if bounds.span > max_span else bounds.max
    return SequenceRange(start=bounds.min, end=end)
