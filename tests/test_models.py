import pytest
from pydantic import ValidationError

from prlens.models import FeedbackPoint, PrReview, PrSummary, PrType, Severity, json_schema_for


def test_summary_parses_agent_json_with_aliases() -> None:
    summary = PrSummary.model_validate(
        {
            "pr_type": "Feature",
            "description": ["Adds diff truncation"],
            "changes": {"enhancements": [{"fileName": "src/a.py", "summary": "new helper"}]},
        }
    )

    assert summary.pr_type is PrType.FEATURE
    assert summary.changes.enhancements is not None
    assert summary.changes.enhancements[0].file_name == "src/a.py"
    assert summary.changes.tests is None


def test_summary_changes_default_to_empty() -> None:
    summary = PrSummary(pr_type=PrType.CHORE, description=["bump deps"])
    assert summary.changes.bugfixes is None


@pytest.mark.parametrize("description", [[], ["1", "2", "3", "4", "5", "6"]])
def test_summary_description_bounds(description: list[str]) -> None:
    with pytest.raises(ValidationError):
        PrSummary(pr_type=PrType.FEATURE, description=description)


def test_summary_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError):
        PrSummary.model_validate({"pr_type": "Hotfix", "description": ["x"]})


def test_review_defaults_and_effort_bounds() -> None:
    review = PrReview(overall_assessment="Looks fine", review_effort=2)
    assert review.feedback_points == []
    assert review.security_concerns == []

    with pytest.raises(ValidationError):
        PrReview(overall_assessment="x", review_effort=0)
    with pytest.raises(ValidationError):
        PrReview(overall_assessment="x", review_effort=6)


def test_feedback_point_severity_optional() -> None:
    point = FeedbackPoint(file_path="a.py", description="bug")
    assert point.severity is None
    assert FeedbackPoint(file_path="a.py", description="bug", severity="High").severity is Severity.HIGH


def test_json_schema_uses_aliases() -> None:
    schema = json_schema_for(PrSummary)
    file_change = schema["$defs"]["FileChange"]
    assert "fileName" in file_change["properties"]
    assert set(schema["required"]) == {"pr_type", "description"}
