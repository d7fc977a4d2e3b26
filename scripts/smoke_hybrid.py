import sys
from pathlib import Path
from typing import Dict, List

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from hybridrank.core.config import settings
from hybridrank.core.logging import configure_logging
from hybridrank.core.types import RankedChunk
from hybridrank.eval.benchmark import BENCHMARK_CASES
from hybridrank.retrieval.hybrid import HybridRetriever
from hybridrank.retrieval.weights import compute_adaptive_weights

load_dotenv()
configure_logging(settings.log_level, settings.log_format)


class ReplayEngine:
    """Serves recorded engine output so the smoke run needs no database."""

    def __init__(self, results: Dict[str, List[RankedChunk]]):
        self.results = results

    def search(self, query: str, top_k: int) -> List[RankedChunk]:
        return self.results.get(query, [])[:top_k]


keyword = ReplayEngine({c.query: [h.to_chunk() for h in c.keyword_results] for c in BENCHMARK_CASES})
vector = ReplayEngine({c.query: [h.to_chunk() for h in c.vector_results] for c in BENCHMARK_CASES})

hybrid = HybridRetriever.from_settings(keyword, vector)

for case in BENCHMARK_CASES:
    w = compute_adaptive_weights(case.query)
    print(f"\nQUERY: {case.query}  (keyword={w.keyword_weight:.2f}, vector={w.vector_weight:.2f})")
    for i, chunk in enumerate(hybrid.retrieve(case.query), start=1):
        mark = "*" if chunk.id in case.relevant_ids else " "
        print(i, mark, chunk.id, "score=", round(chunk.similarity, 6), "|", chunk.document_title)
