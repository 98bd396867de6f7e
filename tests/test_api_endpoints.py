"""Tests for the tabular EpiGraphDB query functions (mocked transport)."""

import pytest

from egdb.api import gene_to_protein, mr, ping, protein_in_pathway, protein_ppi_pairwise
from egdb.errors import APIResponseError, InvalidInputError


def test_ping(fake_api):
    fake_api.routes[("GET", "/ping")] = True
    assert ping(client=fake_api.client()) is True


class TestGeneToProtein:
    """Tests for gene_to_protein."""

    def test_nested_rows(self, fake_api):
        fake_api.routes[("POST", "/mappings/gene-to-protein")] = {
            "results": [
                {"gene": {"name": "TYK2", "ensembl_id": "ENSG00000105397"},
                 "protein": {"uniprot_id": "P29597"}},
                {"gene": {"name": "ICAM1", "ensembl_id": "ENSG00000090339"},
                 "protein": {"uniprot_id": "P05362"}},
            ]
        }
        df = gene_to_protein(["TYK2", "ICAM1", "TYK2"], client=fake_api.client())

        assert fake_api.payload() == {"by_gene_id": False, "gene_name_list": ["TYK2", "ICAM1"]}
        assert df.columns == ["gene_name", "gene_id", "uniprot_id"]
        assert df["uniprot_id"].to_list() == ["P29597", "P05362"]

    def test_flat_rows_and_unmapped_genes(self, fake_api):
        fake_api.routes[("POST", "/mappings/gene-to-protein")] = {
            "results": [
                {"gene.name": "TYK2", "gene.ensembl_id": "ENSG00000105397",
                 "protein.uniprot_id": "P29597"},
                {"gene.name": "LINC01", "gene.ensembl_id": "ENSG0001",
                 "protein.uniprot_id": None},
            ]
        }
        df = gene_to_protein(["TYK2", "LINC01"], client=fake_api.client())
        assert df.height == 1
        assert df.row(0, named=True)["gene_name"] == "TYK2"

    def test_by_gene_id(self, fake_api):
        fake_api.routes[("POST", "/mappings/gene-to-protein")] = {"results": []}
        df = gene_to_protein(["ENSG00000105397"], by_gene_id=True, client=fake_api.client())
        assert fake_api.payload()["gene_id_list"] == ["ENSG00000105397"]
        assert df.height == 0

    def test_requires_genes(self, fake_api):
        with pytest.raises(InvalidInputError):
            gene_to_protein([], client=fake_api.client())
        assert fake_api.requests == []


def test_protein_in_pathway(fake_api):
    fake_api.routes[("POST", "/protein/in-pathway")] = {
        "results": [
            {"uniprot_id": "P29597", "pathway_count": 2,
             "pathway_reactome_id": ["R-HSA-1", "R-HSA-2"]},
            {"uniprot_id": "P05362", "pathway_reactome_id": ["R-HSA-2"]},
        ]
    }
    df = protein_in_pathway(["P29597", "P05362", "Q00000"], client=fake_api.client())

    assert fake_api.payload() == {"uniprot_id_list": ["P29597", "P05362", "Q00000"]}
    assert df.to_dicts() == [
        {"uniprot_id": "P29597", "pathway_count": 2, "pathway_ids": ["R-HSA-1", "R-HSA-2"]},
        {"uniprot_id": "P05362", "pathway_count": 1, "pathway_ids": ["R-HSA-2"]},
    ]


class TestProteinPPIPairwise:
    """Tests for protein_ppi_pairwise."""

    def test_rows(self, fake_api):
        fake_api.routes[("POST", "/protein/ppi/pairwise")] = {
            "results": [
                {"protein": "P29597", "assoc_protein": "P05362", "path_size": 1},
                {"protein": {"uniprot_id": "P05362"},
                 "assoc_protein": {"uniprot_id": "P29597"}, "path_size": 1},
            ]
        }
        df = protein_ppi_pairwise(["P29597", "P05362"], 1, client=fake_api.client())

        assert fake_api.payload()["n_intermediate_proteins"] == 1
        assert df.select("protein", "assoc_protein").rows() == [
            ("P29597", "P05362"),
            ("P05362", "P29597"),
        ]

    def test_negative_intermediates(self, fake_api):
        with pytest.raises(InvalidInputError):
            protein_ppi_pairwise(["P29597"], -1, client=fake_api.client())

    def test_malformed_row(self, fake_api):
        fake_api.routes[("POST", "/protein/ppi/pairwise")] = {
            "results": [{"protein": "P1", "assoc_protein": "P2", "path_size": "far"}]
        }
        with pytest.raises(APIResponseError):
            protein_ppi_pairwise(["P1", "P2"], client=fake_api.client())


class TestMR:
    """Tests for mr."""

    def test_flattens_results(self, fake_api):
        fake_api.routes[("GET", "/mr")] = {
            "results": [
                {"exposure": {"id": "ieu-a-2", "trait": "Body mass index"},
                 "outcome": {"id": "ieu-a-7", "trait": "Coronary heart disease"},
                 "mr": {"b": 0.45, "se": 0.06, "pval": 1e-12}},
            ]
        }
        df = mr(exposure_trait="Body mass index", client=fake_api.client())

        params = fake_api.requests[0].url.params
        assert params["exposure_trait"] == "Body mass index"
        assert "outcome_trait" not in params
        assert df["outcome.trait"].to_list() == ["Coronary heart disease"]
        assert df["mr.b"].to_list() == [0.45]

    def test_empty(self, fake_api):
        fake_api.routes[("GET", "/mr")] = {"results": []}
        assert mr(outcome_trait="x", client=fake_api.client()).height == 0

    def test_requires_a_trait(self, fake_api):
        with pytest.raises(InvalidInputError):
            mr(client=fake_api.client())
