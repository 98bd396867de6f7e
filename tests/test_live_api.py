"""Tests against the live EpiGraphDB API.

Run with: uv run pytest tests/test_live_api.py --run-api
"""

import pytest

from egdb.api import EpiGraphDBClient, gene_to_protein, ping, protein_in_pathway
from egdb.pleiotropy import pathway_groups

pytestmark = pytest.mark.api


@pytest.fixture(scope="module")
def client():
    with EpiGraphDBClient() as c:
        yield c


def test_ping(client):
    assert ping(client=client)


def test_gene_to_protein(client):
    df = gene_to_protein(["TYK2"], client=client)
    assert "P29597" in df["uniprot_id"].to_list()


def test_protein_in_pathway(client):
    df = protein_in_pathway(["P29597"], client=client)
    assert df.columns == ["uniprot_id", "pathway_count", "pathway_ids"]
    assert df["uniprot_id"].to_list() in ([], ["P29597"])


def test_pathway_groups_partition(client):
    result = pathway_groups(["TYK2", "ICAM1", "ICAM3", "S1PR2"], client=client)
    members = [m for g in result.groups for m in g.members]
    assert sorted(members) == sorted(result.graph.nodes)
