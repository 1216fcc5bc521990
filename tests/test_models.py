"""Tests for revfix data models."""

import json

import pytest
from pydantic import ValidationError

from revfix.models import (
    CodeFix,
    FixApplicationResult,
    FixStatus,
    FixType,
    FreeTextFix,
    InvalidFix,
    ReviewIssue,
    ReviewResult,
    Severity,
    StructuredFix,
)


class TestCodeFix:
    """Tests for CodeFix."""

    def test_camel_case_aliases(self) -> None:
        fix = CodeFix.model_validate(
            {"type": "replace", "startLine": 2, "endLine": 4, "newCode": "x"}
        )
        assert fix.type is FixType.REPLACE
        assert (fix.start_line, fix.end_line, fix.new_code) == (2, 4, "x")

    def test_snake_case_accepted(self) -> None:
        fix = CodeFix(type=FixType.DELETE, start_line=3, end_line=5)
        assert fix.new_code == ""

    def test_end_line_defaults_to_start(self) -> None:
        fix = CodeFix.model_validate({"type": "insert", "startLine": 7, "newCode": "y"})
        assert fix.end_line == 7

    def test_null_end_line_defaults_to_start(self) -> None:
        fix = CodeFix.model_validate(
            {"type": "insert", "startLine": 7, "endLine": None, "newCode": "y"}
        )
        assert fix.end_line == 7

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CodeFix.model_validate({"type": "rewrite", "startLine": 1, "newCode": ""})

    def test_dumps_with_reviewer_keys(self) -> None:
        fix = CodeFix(type=FixType.REPLACE, start_line=1, end_line=1, new_code="a")
        data = fix.model_dump(by_alias=True)
        assert data["startLine"] == 1
        assert data["newCode"] == "a"
        assert data["type"] == "replace"


class TestSuggestedFixCoercion:
    """Tests for how ReviewIssue reads the reviewer's suggested fix shapes."""

    def _issue(self, fix: object) -> ReviewIssue:
        return ReviewIssue.model_validate(
            {"file": "a.ts", "line": 1, "severity": "info", "suggestedFix": fix}
        )

    def test_plain_string_is_free_text(self) -> None:
        issue = self._issue("Use a constant here")
        assert isinstance(issue.suggested_fix, FreeTextFix)
        assert issue.suggested_fix.description == "Use a constant here"
        assert issue.structured_fix is None

    def test_json_string_is_structured(self) -> None:
        issue = self._issue(json.dumps({"type": "delete", "startLine": 4, "newCode": ""}))
        assert isinstance(issue.suggested_fix, StructuredFix)
        assert issue.structured_fix is not None
        assert issue.structured_fix.start_line == 4

    def test_json_string_missing_keys_stays_free_text(self) -> None:
        issue = self._issue(json.dumps({"type": "delete", "startLine": 4}))
        assert isinstance(issue.suggested_fix, FreeTextFix)

    def test_bare_object_is_structured(self) -> None:
        issue = self._issue({"type": "replace", "startLine": 2, "newCode": "b"})
        assert issue.structured_fix == CodeFix(
            type=FixType.REPLACE, start_line=2, end_line=2, new_code="b"
        )

    def test_tagged_object_accepted(self) -> None:
        issue = self._issue({"kind": "free_text", "description": "Explain"})
        assert isinstance(issue.suggested_fix, FreeTextFix)

    def test_unknown_type_kept_as_invalid(self) -> None:
        issue = self._issue({"type": "rewrite", "startLine": 2, "newCode": "B"})
        assert isinstance(issue.suggested_fix, InvalidFix)
        assert issue.suggested_fix.raw == {"type": "rewrite", "startLine": 2, "newCode": "B"}
        assert issue.suggested_fix.error.startswith("type:")
        assert issue.structured_fix is None
        assert issue.invalid_fix is issue.suggested_fix

    def test_json_string_with_bad_type_is_invalid(self) -> None:
        issue = self._issue(json.dumps({"type": "move", "startLine": 1, "newCode": ""}))
        assert isinstance(issue.suggested_fix, InvalidFix)

    def test_missing_start_line_is_invalid(self) -> None:
        issue = self._issue({"type": "delete", "endLine": 3})
        assert issue.invalid_fix is not None
        assert "startLine" in issue.invalid_fix.error

    def test_tagged_structured_with_bad_fix_is_invalid(self) -> None:
        issue = self._issue({"kind": "structured", "fix": {"type": "delete"}})
        assert isinstance(issue.suggested_fix, InvalidFix)

    @pytest.mark.parametrize("value", [42, ["replace", 1], {"kind": "patch"}])
    def test_other_shapes_are_invalid(self, value: object) -> None:
        assert isinstance(self._issue(value).suggested_fix, InvalidFix)

    def test_invalid_fix_survives_round_trip(self) -> None:
        issue = self._issue({"type": "rewrite", "startLine": 2, "newCode": "B"})
        restored = ReviewIssue.model_validate_json(issue.model_dump_json(by_alias=True))
        assert restored.suggested_fix == issue.suggested_fix

    def test_missing_fix(self) -> None:
        assert self._issue(None).suggested_fix is None


class TestReviewIssue:
    """Tests for ReviewIssue."""

    def test_defaults(self) -> None:
        issue = ReviewIssue(file="a.ts", line=3, severity=Severity.ERROR)
        assert issue.fix_status is FixStatus.PENDING
        assert issue.original_line is None
        assert issue.was_corrected is False

    def test_empty_file_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ReviewIssue(file="", line=1, severity=Severity.INFO)

    def test_unknown_severity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ReviewIssue.model_validate({"file": "a.ts", "line": 1, "severity": "critical"})

    def test_dump_round_trip_preserves_fix_kind(self) -> None:
        issue = ReviewIssue.model_validate(
            {
                "file": "a.ts",
                "line": 9,
                "originalLine": 3,
                "severity": "warning",
                "suggestedFix": {"type": "delete", "startLine": 9, "newCode": ""},
                "fixStatus": "applied",
            }
        )
        restored = ReviewIssue.model_validate_json(issue.model_dump_json(by_alias=True))
        assert restored == issue
        assert restored.was_corrected is True


class TestReviewResult:
    """Tests for ReviewResult."""

    def test_envelope(self, sample_review: dict) -> None:
        review = ReviewResult.model_validate(sample_review)
        assert review.target_branch == "main"
        assert len(review.issues) == 2
        assert review.issues[0].structured_fix is not None
        assert review.issues[1].structured_fix is None

    def test_unknown_keys_ignored(self) -> None:
        review = ReviewResult.model_validate({"issues": [], "model": "reviewer-x"})
        assert review.issues == []


class TestFixApplicationResult:
    """Tests for FixApplicationResult."""

    def test_failure_has_no_lines(self) -> None:
        result = FixApplicationResult(success=False, error="User cancelled")
        assert result.applied_lines is None
        assert result.model_dump(by_alias=True)["appliedLines"] is None
