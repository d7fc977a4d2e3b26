import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hybridrank.core.config import settings
from hybridrank.eval.benchmark import BENCHMARK_CASES, dump_golden

# Add cases to BENCHMARK_CASES (or edit the JSONL directly) to grow the set
out = dump_golden(BENCHMARK_CASES, settings.golden_path)

print("✅ Wrote", len(BENCHMARK_CASES), "cases to", out)
