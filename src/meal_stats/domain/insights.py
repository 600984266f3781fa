"""Models for generated report insights."""

from pydantic import BaseModel, Field


class InsightPayload(BaseModel):
    """Structured output of the insight generator."""

    insights: list[str] = Field(default_factory=list, max_length=10)
    recommendations: list[str] = Field(default_factory=list, max_length=10)
