"""Structured outputs returned by the summary and review agents."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PrType(str, Enum):
    FEATURE = "Feature"
    BUGFIX = "Bugfix"
    REFACTOR = "Refactor"
    TEST = "Test"
    DOCUMENTATION = "Documentation"
    CHORE = "Chore"
    STYLE = "Style"


class Severity(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    INFO = "Info"


class FileChange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName", description="The full path of the changed file.")
    summary: str = Field(description="A concise summary of the change made in this file.")


class PrChanges(BaseModel):
    """Changes grouped by category; a category is omitted when empty."""

    enhancements: list[FileChange] | None = Field(
        default=None, description="Significant enhancements or new features added/modified."
    )
    tests: list[FileChange] | None = Field(default=None, description="Test files added or modified.")
    config: list[FileChange] | None = Field(
        default=None, description="Configuration changes (dependencies, settings, CI/CD)."
    )
    bugfixes: list[FileChange] | None = Field(default=None, description="Specific bug fixes implemented.")


class PrSummary(BaseModel):
    pr_type: PrType = Field(description="Primary classification of the overall nature of the PR.")
    description: list[str] = Field(
        min_length=1,
        max_length=5,
        description="1-5 bullet points summarising the most significant key changes and why they were made.",
    )
    changes: PrChanges = Field(
        default_factory=PrChanges,
        description="A categorised summary of specific changes made in different files within the PR.",
    )


class FeedbackPoint(BaseModel):
    file_path: str = Field(description="Path of the file the feedback refers to.")
    line_reference: str | None = Field(default=None, description="Line number or range, or a code anchor.")
    description: str = Field(description="The issue or suggestion.")
    severity: Severity | None = Field(default=None, description="How important the feedback is.")
    suggested_code_change: str | None = Field(default=None, description="Optional replacement code.")


class PrReview(BaseModel):
    overall_assessment: str = Field(description="One or two sentences on the overall quality of the change.")
    review_effort: int = Field(ge=1, le=5, description="Estimated effort to review the PR, 1 (trivial) to 5 (hard).")
    review_effort_reasoning: str | None = Field(default=None, description="Justification for the effort score.")
    feedback_points: list[FeedbackPoint] = Field(default_factory=list)
    security_concerns: list[str] = Field(default_factory=list)
    test_coverage_assessment: str | None = None


def json_schema_for(model: type[BaseModel]) -> dict[str, Any]:
    """Return the JSON schema an agent is asked to answer with."""

    return model.model_json_schema(by_alias=True)


__all__ = [
    "PrType",
    "Severity",
    "FileChange",
    "PrChanges",
    "PrSummary",
    "FeedbackPoint",
    "PrReview",
    "json_schema_for",
]
