from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

from hybridrank.core.types import DEFAULT_RRF_K, FusionOptions, FusionStrategy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Fusion parameters
    rrf_k: int = Field(DEFAULT_RRF_K, alias="RRF_K")
    fusion_strategy: FusionStrategy = Field(FusionStrategy.RRF, alias="FUSION_STRATEGY")
    # Leave unset to derive weights from the query shape
    keyword_weight: Optional[float] = Field(None, alias="KEYWORD_WEIGHT")
    vector_weight: Optional[float] = Field(None, alias="VECTOR_WEIGHT")

    # Hybrid retrieval
    hybrid_top_k: int = Field(5, alias="HYBRID_TOP_K")
    candidate_multiplier: int = Field(2, alias="CANDIDATE_MULTIPLIER")

    # Offline evaluation
    eval_k: int = Field(5, alias="EVAL_K")
    golden_path: str = Field("data/golden.jsonl", alias="GOLDEN_PATH")
    eval_results_path: str = Field("data/eval_results.csv", alias="EVAL_RESULTS_PATH")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("console", alias="LOG_FORMAT")  # "json" | "console"

    def fusion_options(self, query: Optional[str] = None) -> FusionOptions:
        return FusionOptions(
            strategy=self.fusion_strategy,
            keyword_weight=self.keyword_weight,
            vector_weight=self.vector_weight,
            rrf_k=self.rrf_k,
            query=query,
        )


settings = Settings()
