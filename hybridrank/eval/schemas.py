from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List

from hybridrank.core.types import EvalQuery, RankedChunk, ScoredItem


class ScoredHit(BaseModel):
    id: str
    score: float

    def to_item(self) -> ScoredItem:
        return ScoredItem(id=self.id, score=self.score)

    def to_chunk(self) -> RankedChunk:
        return RankedChunk.from_scored(self.to_item())


class GoldenCase(BaseModel):
    """One labeled query plus the raw lists each engine returned for it."""

    query: str
    relevant_ids: List[str]
    keyword_results: List[ScoredHit] = Field(default_factory=list)
    vector_results: List[ScoredHit] = Field(default_factory=list)

    def to_eval_query(self) -> EvalQuery:
        return EvalQuery.of(self.query, self.relevant_ids)
