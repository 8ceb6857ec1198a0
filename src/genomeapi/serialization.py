"""Record serialization for genomeapi tool responses.

Converts the frozen value records into JSON-compatible dicts using the wire
keys the browser front end consumes (``sourceName``, ``genomicInfo``,
``actualRange``, ...). Optional analysis fields are omitted when unset.
"""

from __future__ import annotations

from typing import Any

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
    SequenceRange,
    SequenceResult,
)


def serialize_genome(genome: GenomeAssembly) -> dict:
    return {
        "id": genome.id,
        "name": genome.name,
        "sourceName": genome.source_name,
        "active": genome.active,
    }


def serialize_genomes(grouped: dict[str, list[GenomeAssembly]]) -> dict:
    return {
        "genomes": {
            organism: [serialize_genome(g) for g in genomes]
            for organism, genomes in grouped.items()
        }
    }


def serialize_chromosomes(chromosomes: list[Chromosome]) -> dict:
    return {"chromosomes": [{"name": c.name, "size": c.size} for c in chromosomes]}


def _serialize_gene(gene: GeneSearchResult) -> dict:
    d: dict[str, Any] = {
        "symbol": gene.symbol,
        "name": gene.name,
        "chrom": gene.chrom,
        "description": gene.description,
    }
    if gene.gene_id is not None:
        d["gene_id"] = gene.gene_id
    return d


def serialize_gene_search(response: GeneSearchResponse) -> dict:
    return {
        "query": response.query,
        "genome": response.genome,
        "results": [_serialize_gene(g) for g in response.results],
    }


def _serialize_range(r: SequenceRange | None) -> dict | None:
    if r is None:
        return None
    return {"start": r.start, "end": r.end}


def _serialize_bounds(b: GeneBounds | None) -> dict | None:
    if b is None:
        return None
    return {"min": b.min, "max": b.max}


def _serialize_details(details: GeneDetails | None) -> dict | None:
    """Serialize gene details, omitting absent optional fields."""
    if details is None:
        return None
    d: dict[str, Any] = {
        "genomicInfo": [
            {"chrStart": i.chr_start, "chrStop": i.chr_stop, "strand": i.strand}
            for i in details.genomic_info
        ],
    }
    if details.summary is not None:
        d["summary"] = details.summary
    if details.organism is not None:
        d["organism"] = {
            "scientificname": details.organism.scientific_name,
            "commonname": details.organism.common_name,
        }
    return d


def serialize_gene_details(result: GeneDetailsResult) -> dict:
    return {
        "geneDetails": _serialize_details(result.gene_details),
        "geneBounds": _serialize_bounds(result.gene_bounds),
        "initialRange": _serialize_range(result.initial_range),
    }


def serialize_sequence(result: SequenceResult) -> dict:
    d: dict[str, Any] = {
        "sequence": result.sequence,
        "actualRange": _serialize_range(result.actual_range),
    }
    if result.error is not None:
        d["error"] = result.error
    return d


def _serialize_evo2(result: Evo2Result) -> dict:
    return {
        "prediction": result.prediction,
        "delta_score": result.delta_score,
        "classification_confidence": result.classification_confidence,
        "reference": result.reference,
    }


def serialize_variant(variant: ClinvarVariant) -> dict:
    """Serialize a ClinVar variant; analysis fields appear only once set."""
    d: dict[str, Any] = {
        "clinvar_id": variant.clinvar_id,
        "title": variant.title,
        "variation_type": variant.variation_type,
        "classification": variant.classification,
        "gene_sort": variant.gene_sort,
        "chromosome": variant.chromosome,
        "location": variant.location,
    }
    if variant.evo2_result is not None:
        d["evo2Result"] = _serialize_evo2(variant.evo2_result)
    if variant.is_analyzing:
        d["isAnalyzing"] = True
    if variant.evo2_error is not None:
        d["evo2Error"] = variant.evo2_error
    return d


def serialize_variants(variants: list[ClinvarVariant]) -> dict:
    return {"variants": [serialize_variant(v) for v in variants]}


def serialize_analysis(result: AnalysisResult) -> dict:
    return {
        "position": result.position,
        "reference": result.reference,
        "alternative": result.alternative,
        "delta_score": result.delta_score,
        "prediction": result.prediction,
        "classification_confidence": result.classification_confidence,
    }
