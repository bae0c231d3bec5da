from __future__ import annotations

import pytest

from domsenricher.domain.model import TreeNode
from tests.support.repository import InMemoryRepository, make_batch_tree

RDF_WITH_RELATIONS = (
    '<rdf:RDF xmlns:doms="http://doms.statsbiblioteket.dk/relations/default/0/1/#" '
    'xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">\n'
    '  <rdf:Description rdf:about="info:fedora/uuid:65e7ece1-1b90-4f12-9f8f-c8e77b354f66">\n'
    '    <hasModel xmlns="info:fedora/fedora-system:def/model#" '
    'rdf:resource="info:fedora/doms:ContentModel_RoundTrip"></hasModel>\n'
    '    <hasModel xmlns="info:fedora/fedora-system:def/model#" '
    'rdf:resource="info:fedora/doms:ContentModel_DOMS"></hasModel>\n'
    "    <doms:isPartOfCollection "
    'rdf:resource="info:fedora/doms:Newspaper_Collection"></doms:isPartOfCollection>\n'
    '    <hasPart xmlns="info:fedora/fedora-system:def/relations-external#" '
    'rdf:resource="info:fedora/uuid:05d840bf-8bb6-48e5-b214-2ab39f6259f8"></hasPart>\n'
    '    <hasPart xmlns="info:fedora/fedora-system:def/relations-external#" '
    'rdf:resource="info:fedora/uuid:c625596a-9bbc-4331-b55c-beb55a3b80fe"></hasPart>\n'
    "  </rdf:Description>\n"
    "</rdf:RDF>"
)


@pytest.fixture
def rdf_with_relations() -> str:
    return RDF_WITH_RELATIONS


@pytest.fixture
def batch_tree() -> TreeNode:
    return make_batch_tree()


@pytest.fixture
def repository(batch_tree: TreeNode) -> InMemoryRepository:
    return InMemoryRepository().seed(batch_tree)
