"""Unit tests for genomeapi.tools module."""

import json
import re

import pytest

from genomeapi.tools import (
    get_api_client,
    handle_analyze_clinvar_variant,
    handle_analyze_variant,
    handle_get_clinvar_variants,
    handle_get_gene_details,
    handle_get_gene_sequence,
    handle_list_chromosomes,
    handle_list_genomes,
    handle_search_genes,
)

ANALYZE_URL = "https://analysis.example.test/analyze_variant"
GENOMES_URL = "https://api.genome.ucsc.edu/list/ucscGenomes"
CHROMOSOMES_URL = re.compile(r"https://api\.genome\.ucsc\.edu/list/chromosomes.*")
SEQUENCE_URL = re.compile(r"https://api\.genome\.ucsc\.edu/getData/sequence.*")
SEARCH_URL = re.compile(r"https://clinicaltables\.nlm\.nih\.gov/api/ncbi_genes/v3/search.*")
ESEARCH_URL = re.compile(r"https://eutils\.ncbi\.nlm\.nih\.gov/entrez/eutils/esearch\.fcgi.*")
ESUMMARY_URL = re.compile(r"https://eutils\.ncbi\.nlm\.nih\.gov/entrez/eutils/esummary\.fcgi.*")

ANALYSIS_RESPONSE = {
    "position": 7674220,
    "reference": "C",
    "alternative": "T",
    "delta_score": -0.0123,
    "prediction": "Likely pathogenic",
    "classification_confidence": 0.91,
}


def _payload(result: dict) -> dict:
    assert result["content"][0]["type"] == "text"
    return json.loads(result["content"][0]["text"])


class TestApiClientSingleton:
    @pytest.mark.unit
    def test_reused_between_calls(self, config):
        assert get_api_client(config) is get_api_client(config)


class TestListGenomesTool:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, config, httpx_mock):
        httpx_mock.add_response(
            url=GENOMES_URL,
            json={"ucscGenomes": {"hg38": {"description": "hg38 desc", "organism": "Human"}}},
        )

        payload = _payload(await handle_list_genomes({}, config))

        assert payload == {
            "genomes": {
                "Human": [
                    {"id": "hg38", "name": "hg38 desc", "sourceName": "hg38", "active": False}
                ]
            }
        }

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_upstream_error(self, config, httpx_mock):
        httpx_mock.add_response(url=GENOMES_URL, status_code=500)

        payload = _payload(await handle_list_genomes({}, config))

        assert payload["error"].startswith("Failed to fetch genome list")


class TestListChromosomesTool:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, config, httpx_mock):
        httpx_mock.add_response(
            url=CHROMOSOMES_URL,
            json={"chromosomes": {"chr2": 200, "chr1": 100, "chrUn_x": 5}},
        )

        payload = _payload(await handle_list_chromosomes({"genome_id": "hg38"}, config))

        assert payload == {
            "chromosomes": [{"name": "chr1", "size": 100}, {"name": "chr2", "size": 200}]
        }

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_genome_id(self, config):
        payload = _payload(await handle_list_chromosomes({"genome_id": "hg38;drop"}, config))
        assert "Invalid genome id" in payload["error"]


class TestSearchGenesTool:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, config, httpx_mock):
        record = ["17", "TP53", "tumor protein p53", "17p13.1", "protein-coding", "", 7157]
        httpx_mock.add_response(url=SEARCH_URL, json=[1, ["TP53"], None, [record]])

        payload = _payload(await handle_search_genes({"query": "TP53", "genome": "hg38"}, config))

        assert payload["query"] == "TP53"
        assert payload["genome"] == "hg38"
        assert payload["results"] == [
            {
                "symbol": "TP53",
                "name": "tumor protein p53",
                "chrom": "chr17",
                "description": "tumor protein p53 (17p13.1)",
                "gene_id": "7157",
            }
        ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_query(self, config):
        payload = _payload(await handle_search_genes({"query": "  ", "genome": "hg38"}, config))
        assert payload["error"] == "Search query must not be empty"


class TestGeneDetailsTool:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, config, httpx_mock):
        httpx_mock.add_response(
            url=ESUMMARY_URL,
            json={
                "result": {
                    "7157": {
                        "summary": "tumor suppressor",
                        "genomicinfo": [{"chrstart": 7687537, "chrstop": 7668401}],
                    }
                }
            },
        )

        payload = _payload(await handle_get_gene_details({"gene_id": "7157"}, config))

        assert payload["geneBounds"] == {"min": 7668401, "max": 7687537}
        assert payload["initialRange"] == {"start": 7668401, "end": 7678401}
        assert payload["geneDetails"]["summary"] == "tumor suppressor"
        assert payload["geneDetails"]["genomicInfo"] == [
            {"chrStart": 7687537, "chrStop": 7668401, "strand": None}
        ]
        assert "organism" not in payload["geneDetails"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_not_found_is_all_null(self, config, httpx_mock):
        httpx_mock.add_response(url=ESUMMARY_URL, status_code=500)

        payload = _payload(await handle_get_gene_details({"gene_id": "1"}, config))

        assert payload == {"geneDetails": None, "geneBounds": None, "initialRange": None}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_numeric_id(self, config):
        payload = _payload(await handle_get_gene_details({"gene_id": "TP53"}, config))
        assert payload["error"] == "Invalid NCBI gene id: TP53"


class TestGeneSequenceTool:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, config, httpx_mock):
        httpx_mock.add_response(url=SEQUENCE_URL, json={"dna": "acgt"})

        payload = _payload(
            await handle_get_gene_sequence(
                {"chrom": "chr1", "start": 1, "end": 4, "genome_id": "hg38"}, config
            )
        )

        assert payload == {"sequence": "ACGT", "actualRange": {"start": 1, "end": 4}}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_upstream_error_in_payload(self, config, httpx_mock):
        httpx_mock.add_response(url=SEQUENCE_URL, json={"error": "bad range"})

        payload = _payload(
            await handle_get_gene_sequence(
                {"chrom": "chr1", "start": 1, "end": 4, "genome_id": "hg38"}, config
            )
        )

        assert payload["sequence"] == ""
        assert payload["error"] == "bad range"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_range(self, config):
        payload = _payload(
            await handle_get_gene_sequence(
                {"chrom": "chr1", "start": 0, "end": 4, "genome_id": "hg38"}, config
            )
        )
        assert "Start must be positive" in payload["error"]


class TestClinvarVariantsTool:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, config, httpx_mock):
        httpx_mock.add_response(url=ESEARCH_URL, json={"esearchresult": {"idlist": ["12375"]}})
        httpx_mock.add_response(
            url=ESUMMARY_URL,
            json={
                "result": {
                    "uids": ["12375"],
                    "12375": {
                        "title": "NM_000546.6(TP53):c.743G>A (p.Arg248Gln)",
                        "obj_type": "single nucleotide variant",
                        "germline_classification": {"description": "Pathogenic"},
                        "gene_sort": "TP53",
                        "location_sort": "7674220",
                    },
                }
            },
        )

        payload = _payload(
            await handle_get_clinvar_variants(
                {"chrom": "chr17", "min": 7687537, "max": 7668401, "genome_id": "hg38"}, config
            )
        )

        assert "disclaimer" in payload
        assert payload["variants"] == [
            {
                "clinvar_id": "12375",
                "title": "NM_000546.6(TP53):c.743G>A (p.Arg248Gln)",
                "variation_type": "Single Nucleotide Variant",
                "classification": "Pathogenic",
                "gene_sort": "TP53",
                "chromosome": "17",
                "location": "7,674,220",
            }
        ]
        term = httpx_mock.get_requests()[0].url.params["term"]
        assert term == "17[chromosome] AND 7668401:7687537[chrpos38]"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_error_keeps_disclaimer(self, config, httpx_mock):
        httpx_mock.add_response(url=ESEARCH_URL, status_code=500)

        payload = _payload(
            await handle_get_clinvar_variants(
                {"chrom": "chr17", "min": 1, "max": 2, "genome_id": "hg38"}, config
            )
        )

        assert payload["error"].startswith("Clinvar search failed")
        assert "disclaimer" in payload


class TestAnalyzeVariantTool:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, config, httpx_mock):
        httpx_mock.add_response(url=ANALYZE_URL, method="POST", json=ANALYSIS_RESPONSE)

        payload = _payload(
            await handle_analyze_variant(
                {
                    "position": 7674220,
                    "alternative": "t",
                    "genome_id": "hg38",
                    "chromosome": "chr17",
                },
                config,
            )
        )

        assert payload == ANALYSIS_RESPONSE
        assert json.loads(httpx_mock.get_request().content)["alternative"] == "T"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_allele(self, config):
        payload = _payload(
            await handle_analyze_variant(
                {"position": 1, "alternative": "AT", "genome_id": "hg38", "chromosome": "chr1"},
                config,
            )
        )
        assert payload["error"] == "Invalid alternate allele: AT"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_service_error(self, config, httpx_mock):
        httpx_mock.add_response(url=ANALYZE_URL, method="POST", status_code=500, text="boom")

        payload = _payload(
            await handle_analyze_variant(
                {"position": 1, "alternative": "A", "genome_id": "hg38", "chromosome": "chr1"},
                config,
            )
        )
        assert payload["error"] == "Failed to analyze variant boom"


class TestAnalyzeClinvarVariantTool:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, config, httpx_mock):
        httpx_mock.add_response(url=ANALYZE_URL, method="POST", json=ANALYSIS_RESPONSE)

        payload = _payload(
            await handle_analyze_clinvar_variant(
                {
                    "clinvar_id": "12375",
                    "title": "NM_000546.6(TP53):c.743C>T",
                    "chromosome": "17",
                    "location": "7,674,220",
                    "genome_id": "hg38",
                },
                config,
            )
        )

        assert payload["clinvar_id"] == "12375"
        assert payload["evo2Result"] == {
            "prediction": "Likely pathogenic",
            "delta_score": -0.0123,
            "classification_confidence": 0.91,
            "reference": "C",
        }
        assert "evo2Error" not in payload
        assert "isAnalyzing" not in payload

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_snv(self, config):
        payload = _payload(
            await handle_analyze_clinvar_variant(
                {
                    "clinvar_id": "1",
                    "title": "c.1009_1010del",
                    "chromosome": "17",
                    "location": "7,674,220",
                    "genome_id": "hg38",
                },
                config,
            )
        )
        assert payload["evo2Error"] == "Only single nucleotide variants can be analyzed"
