"""Configuration models for the hybrid retrieval agent."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class RetrievalConfig(BaseModel):
    """Configures the local semantic and keyword scorers."""

    top_k: int = Field(default=3, ge=1)
    keyword_score_decimals: int = Field(default=2, ge=0)


class PlannerConfig(BaseModel):
    """Configures the query-length heuristic used to pick a strategy."""

    short_query_max_tokens: int = Field(default=2, ge=0)
    long_query_min_tokens: int = Field(default=7, ge=1)
    keyword_confidence: float = Field(default=0.5, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "PlannerConfig":
        if self.short_query_max_tokens >= self.long_query_min_tokens:
            raise ValueError("short_query_max_tokens must be below long_query_min_tokens")
        return self


class AgentConfig(BaseModel):
    """Configures confidence escalation and result formatting."""

    confidence_threshold: float = Field(default=0.75, ge=0.0, le=1.0)
    fallback_timeout_seconds: float = Field(default=5.0, gt=0.0)
    score_decimals: int = Field(default=2, ge=0)
