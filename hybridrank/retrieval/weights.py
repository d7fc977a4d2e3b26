from __future__ import annotations

import re
from dataclasses import dataclass

from hybridrank.core.types import DEFAULT_KEYWORD_WEIGHT, DEFAULT_VECTOR_WEIGHT

SHORT_QUERY_MAX_TOKENS = 3
LONG_QUERY_MIN_TOKENS = 15
CJK_KEYWORD_BONUS = 0.1
CJK_KEYWORD_CAP = 0.6

# CJK ideographs (incl. Ext. A and compatibility block), kana and Hangul syllables
_CJK_RE = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uac00-\ud7af\uf900-\ufaff]")


@dataclass(frozen=True)
class FusionWeights:
    keyword_weight: float = DEFAULT_KEYWORD_WEIGHT
    vector_weight: float = DEFAULT_VECTOR_WEIGHT


DEFAULT_WEIGHTS = FusionWeights()


def count_tokens(query: str) -> int:
    # An empty query still counts as one token.
    return max(len(query.strip().split()), 1)


def has_cjk(text: str) -> bool:
    return _CJK_RE.search(text) is not None


def compute_adaptive_weights(query: str) -> FusionWeights:
    """
    Pick the keyword/vector blend from the query shape.

    Short queries (<= 3 tokens) tend to be exact lookups, so lexical and
    semantic signal get equal weight. Long natural-language queries (>= 15
    tokens) lean on the vector side. CJK text adds a keyword bonus (capped at
    0.6) since embeddings handle CJK synonymy less reliably than full-text
    matching. The pair always sums to 1.0.
    """
    tokens = count_tokens(query)

    keyword_weight = DEFAULT_KEYWORD_WEIGHT
    vector_weight = DEFAULT_VECTOR_WEIGHT

    if tokens <= SHORT_QUERY_MAX_TOKENS:
        keyword_weight, vector_weight = 0.5, 0.5
    elif tokens >= LONG_QUERY_MIN_TOKENS:
        keyword_weight, vector_weight = 0.2, 0.8

    if has_cjk(query):
        keyword_weight = min(keyword_weight + CJK_KEYWORD_BONUS, CJK_KEYWORD_CAP)
        vector_weight = 1.0 - keyword_weight

    return FusionWeights(keyword_weight=keyword_weight, vector_weight=vector_weight)
