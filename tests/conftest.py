import pytest

from hybridrank.core.types import RankedChunk, ScoredItem


def make_chunk(cid: str, similarity: float = 0.8, title: str = "") -> RankedChunk:
    return RankedChunk(
        id=cid,
        document_id=f"doc-{cid}",
        document_title=title or f"Document {cid}",
        content=f"Content of chunk {cid}",
        similarity=similarity,
    )


def items(*ids: str):
    return [ScoredItem(id=cid, score=1.0 - i * 0.1) for i, cid in enumerate(ids)]


@pytest.fixture
def relevant():
    return frozenset({"a", "b", "c"})


@pytest.fixture
def perfect_results():
    return items("a", "b", "c")


@pytest.fixture
def bad_results():
    return items("x", "y", "z")


@pytest.fixture
def mixed_results():
    # relevant hits at positions 2 and 4
    return items("x", "a", "y", "b", "z")
