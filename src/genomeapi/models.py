"""Value records produced by the genomeapi clients.

All records are frozen: they live for the duration of one response-handling
call and are never mutated. Use :func:`dataclasses.replace` to derive updated
copies (e.g. when a downstream analysis step annotates a ClinVar variant).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GenomeAssembly:
    """One UCSC genome build."""

    id: str
    name: str
    source_name: str
    active: bool


@dataclass(frozen=True)
class Chromosome:
    """A primary chromosome and its length in bases."""

    name: str
    size: int | None = None


@dataclass(frozen=True)
class GeneSearchResult:
    """One hit from the clinical-tables gene search."""

    symbol: str
    name: str
    chrom: str
    description: str
    gene_id: str | None = None


@dataclass(frozen=True)
class GeneSearchResponse:
    """Gene search hits with the query and genome echoed for correlation."""

    query: str
    genome: str
    results: tuple[GeneSearchResult, ...] = ()


@dataclass(frozen=True)
class GenomicInfo:
    """Genomic placement of a gene as reported by NCBI (unordered start/stop)."""

    chr_start: int
    chr_stop: int
    strand: str | None = None


@dataclass(frozen=True)
class Organism:
    scientific_name: str
    common_name: str


@dataclass(frozen=True)
class GeneDetails:
    """NCBI gene summary fields used by the browser."""

    genomic_info: tuple[GenomicInfo, ...] = ()
    summary: str | None = None
    organism: Organism | None = None


@dataclass(frozen=True)
class GeneBounds:
    """Gene extent; producers order the pair so ``min <= max``."""

    min: int
    max: int

    @property
    def span(self) -> int:
        return self.max - self.min


@dataclass(frozen=True)
class SequenceRange:
    """1-based inclusive coordinate range."""

    start: int
    end: int


@dataclass(frozen=True)
class GeneDetailsResult:
    """Gene details with derived bounds; all fields are None on failure."""

    gene_details: GeneDetails | None = None
    gene_bounds: GeneBounds | None = None
    initial_range: SequenceRange | None = None

    @property
    def found(self) -> bool:
        return self.gene_details is not None


@dataclass(frozen=True)
class SequenceResult:
    """DNA sequence for a requested range, or an empty sequence with an error."""

    sequence: str
    actual_range: SequenceRange
    error: str | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """Single-variant effect prediction returned by the analysis service."""

    position: int
    reference: str
    alternative: str
    delta_score: float
    prediction: str
    classification_confidence: float


@dataclass(frozen=True)
class Evo2Result:
    """The subset of an AnalysisResult attached to a ClinVar variant."""

    prediction: str
    delta_score: float
    classification_confidence: float
    reference: str

    @classmethod
    def from_analysis(cls, result: AnalysisResult) -> Evo2Result:
        return cls(
            prediction=result.prediction,
            delta_score=result.delta_score,
            classification_confidence=result.classification_confidence,
            reference=result.reference,
        )


@dataclass(frozen=True)
class ClinvarVariant:
    """A flattened ClinVar esummary record.

    The ``evo2_*`` and ``is_analyzing`` fields are filled in by the downstream
    analysis step, never by the ClinVar fetch itself.
    """

    clinvar_id: str
    title: str
    variation_type: str
    classification: str
    gene_sort: str
    chromosome: str
    location: str
    evo2_result: Evo2Result | None = field(default=None, compare=False)
    is_analyzing: bool = field(default=False, compare=False)
    evo2_error: str | None = field(default=None, compare=False)
