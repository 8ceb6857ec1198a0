"""External API client modules."""

from .analysis import AnalysisClient
from .clinvar import ClinVarClient
from .genes import GeneClient
from .ucsc import UCSCClient

__all__ = [
    "AnalysisClient",
    "ClinVarClient",
    "GeneClient",
    "UCSCClient",
]
