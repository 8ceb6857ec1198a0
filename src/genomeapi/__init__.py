"""Client helpers for the UCSC Genome Browser, NCBI gene and ClinVar APIs."""

from .api import GenomeApiClient, mark_analyzing, parse_location
from .config import GenomeApiConfig
from .errors import RequestError
from .models import (
    AnalysisResult,
    Chromosome,
    ClinvarVariant,
    Evo2Result,
    GeneBounds,
    GeneDetails,
    GeneDetailsResult,
    GeneSearchResponse,
    GeneSearchResult,
    GenomeAssembly,
    GenomicInfo,
    Organism,
    SequenceRange,
    SequenceResult,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "Chromosome",
    "ClinvarVariant",
    "Evo2Result",
    "GeneBounds",
    "GeneDetails",
    "GeneDetailsResult",
    "GeneSearchResponse",
    "GeneSearchResult",
    "GenomeApiClient",
    "GenomeApiConfig",
    "GenomeAssembly",
    "GenomicInfo",
    "Organism",
    "RequestError",
    "SequenceRange",
    "SequenceResult",
    "__version__",
    "mark_analyzing",
    "parse_location",
]
