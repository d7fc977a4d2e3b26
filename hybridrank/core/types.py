from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional, Sequence

DEFAULT_RRF_K = 60
DEFAULT_KEYWORD_WEIGHT = 0.3
DEFAULT_VECTOR_WEIGHT = 0.7

METRIC_NAMES = ("mrr", "ndcg", "precision_at_k", "recall_at_k", "f1_at_k", "hit_rate")


@dataclass(frozen=True)
class ScoredItem:
    id: str
    score: float


@dataclass(frozen=True)
class RankedChunk:
    id: str
    document_id: str
    document_title: str
    content: str
    similarity: float           # retrieval score in, fused score out

    def to_scored(self) -> ScoredItem:
        return ScoredItem(id=self.id, score=self.similarity)

    @classmethod
    def from_scored(cls, item: ScoredItem) -> "RankedChunk":
        return cls(
            id=item.id,
            document_id=f"doc-{item.id}",
            document_title=f"Doc {item.id}",
            content=f"Content {item.id}",
            similarity=item.score,
        )


class FusionStrategy(str, Enum):
    RRF = "rrf"
    SCORE = "score"


@dataclass(frozen=True)
class FusionOptions:
    strategy: FusionStrategy = FusionStrategy.RRF
    keyword_weight: Optional[float] = None
    vector_weight: Optional[float] = None
    rrf_k: int = DEFAULT_RRF_K
    query: Optional[str] = None     # enables adaptive weights when weights are omitted


@dataclass(frozen=True)
class EvalQuery:
    query: str
    relevant_ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, query: str, relevant_ids: Sequence[str]) -> "EvalQuery":
        return cls(query=query, relevant_ids=frozenset(relevant_ids))


@dataclass(frozen=True)
class QueryMetrics:
    mrr: float = 0.0
    ndcg: float = 0.0
    precision_at_k: float = 0.0
    recall_at_k: float = 0.0
    f1_at_k: float = 0.0
    hit_rate: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


# Field-wise mean of QueryMetrics over a query set.
AggregateMetrics = QueryMetrics

RetrieverFn = Callable[[str], Sequence[ScoredItem]]


@dataclass(frozen=True)
class RetrievalStrategy:
    name: str
    fn: RetrieverFn


@dataclass(frozen=True)
class ABTestResult:
    name_a: str
    name_b: str
    metrics_a: AggregateMetrics
    metrics_b: AggregateMetrics
    improvement: Dict[str, str]     # metric name -> signed percentage of B over A
    winner: str                     # "A" | "B" | "tie"

    @property
    def winner_name(self) -> str:
        if self.winner == "A":
            return self.name_a
        if self.winner == "B":
            return self.name_b
        return "Tie"
