"""Input validation for genomeapi tool handlers.

Checks chromosome names, genome ids, coordinate ranges and alleles before a
request is sent upstream.
"""

from __future__ import annotations

import re

# Chromosome names (chr prefix optional); alternate and unplaced contigs included
CHROM_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]{1,64}$")

# UCSC genome ids such as hg38, mm10, GCF_000001405.40
GENOME_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.]{1,64}$")

# Single-base alternate allele for the analysis service
ALLELE_PATTERN = re.compile(r"^[ACGT]$", re.IGNORECASE)

MAX_QUERY_LENGTH = 200
MAX_SEQUENCE_SPAN = 1_000_000


def validate_chrom(chrom: str) -> str | None:
    """Return an error message for a malformed chromosome name, else None."""
    if not CHROM_PATTERN.match(chrom):
        return f"Invalid chromosome: {chrom}"
    return None


def validate_genome_id(genome_id: str) -> str | None:
    if not GENOME_ID_PATTERN.match(genome_id):
        return f"Invalid genome id: {genome_id}"
    return None


def validate_query(query: str) -> str | None:
    if not query.strip():
        return "Search query must not be empty"
    if len(query) > MAX_QUERY_LENGTH:
        return f"Search query too long (max {MAX_QUERY_LENGTH} characters)"
    return None


def validate_range(start: int, end: int) -> str | None:
    """Validate a 1-based inclusive coordinate range.

    Returns:
        Error message if validation fails, None if valid.
    """
    if start < 1:
        return f"Start must be positive, got {start}"
    if end < start:
        return f"End ({end}) must not be before start ({start})"
    if end - start + 1 > MAX_SEQUENCE_SPAN:
        return f"Range exceeds maximum span ({MAX_SEQUENCE_SPAN:,}bp)"
    return None


def validate_variant_input(chrom: str, pos: int, alt: str, genome_id: str) -> str | None:
    """Validate analysis input parameters.

    Returns:
        Error message if validation fails, None if valid.
    """
    for error in (validate_chrom(chrom), validate_genome_id(genome_id)):
        if error:
            return error
    if pos < 1:
        return f"Position must be positive, got {pos}"
    if not ALLELE_PATTERN.match(alt):
        return f"Invalid alternate allele: {alt}"
    return None
