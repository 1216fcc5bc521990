"""Review issue and code fix models.

An issue arrives from the AI reviewer with a claimed line, an optional
snippet of the code it believes is on that line, and an optional
suggested fix. Suggested fixes are a tagged variant: free text is for
display only, a structured fix can be applied mechanically, and a fix
that was meant to be structured but is malformed is kept as invalid.
"""

import json
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError


class Severity(str, Enum):
    """Issue severity as reported by the reviewer."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FixStatus(str, Enum):
    """Lifecycle of an issue's suggested fix."""

    PENDING = "pending"
    APPLIED = "applied"
    DISMISSED = "dismissed"
    FAILED = "failed"


class FixType(str, Enum):
    """Operation carried by a structured fix."""

    REPLACE = "replace"
    INSERT = "insert"
    DELETE = "delete"


class CodeFix(BaseModel):
    """Structured, machine-appliable patch over a 1-based inclusive line range.

    Line numbers refer to the current numbering of the target file. For
    inserts the end line is ignored; for replace and delete an end line
    before the start line is rejected when the range is resolved.

    Example:
        >>> fix = CodeFix.model_validate({"type": "replace", "startLine": 2, "newCode": "B"})
        >>> fix.end_line
        2
    """

    model_config = ConfigDict(populate_by_name=True)

    type: FixType
    start_line: int = Field(alias="startLine", description="First line (1-based)")
    end_line: int = Field(alias="endLine", description="Last line (1-based, inclusive)")
    new_code: str = Field(default="", alias="newCode", description="Replacement or inserted text")
    description: str = Field(default="", description="Human-readable rationale")

    @model_validator(mode="before")
    @classmethod
    def _default_end_line(cls, data: Any) -> Any:
        """Single-line fixes may omit the end line or leave it null."""
        if isinstance(data, dict) and data.get("endLine", data.get("end_line")) is None:
            start = data.get("startLine", data.get("start_line"))
            if start is not None:
                data = {k: v for k, v in data.items() if k not in ("endLine", "end_line")}
                data["endLine"] = start
        return data


class FreeTextFix(BaseModel):
    """Suggestion given as prose. Shown to the user, never applied."""

    kind: Literal["free_text"] = "free_text"
    description: str


class StructuredFix(BaseModel):
    """Suggestion given as a CodeFix that can be applied."""

    kind: Literal["structured"] = "structured"
    fix: CodeFix


class InvalidFix(BaseModel):
    """Suggestion meant as a CodeFix that does not validate.

    Kept on the issue so the rest of the review still loads; applying it
    fails for this issue alone.
    """

    kind: Literal["invalid"] = "invalid"
    raw: Any = None
    error: str


SuggestedFix = Annotated[FreeTextFix | StructuredFix | InvalidFix, Field(discriminator="kind")]


def _parse_json_fix(text: str) -> dict[str, Any] | None:
    """Return a fix payload if text is a JSON-encoded CodeFix, else None."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if isinstance(data, dict) and {"type", "startLine", "newCode"} <= data.keys():
        return data
    return None


def _describe_errors(error: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'fix'}: {err['msg']}"
        for err in error.errors()
    )


def _structured_or_invalid(payload: Any) -> dict[str, Any]:
    try:
        fix = CodeFix.model_validate(payload)
    except PydanticValidationError as e:
        return {"kind": "invalid", "raw": payload, "error": _describe_errors(e)}
    return {"kind": "structured", "fix": fix}


class ReviewIssue(BaseModel):
    """Single issue reported by the AI reviewer.

    Attributes:
        file: Workspace-relative path of the file the issue refers to.
        line: 1-based line number, possibly corrected by reconciliation.
        original_line: The reviewer's claimed line, kept once a correction happened.
        code_snippet: Expected content of the line, used to verify it.
        message: Issue description.
        severity: error, warning or info.
        category: Free-form category such as "Security" or "Bug".
        suggested_fix: Free-text, structured or invalid fix.
        fix_status: pending, applied, dismissed or failed.
    """

    model_config = ConfigDict(populate_by_name=True)

    file: str = Field(min_length=1)
    line: int
    original_line: int | None = Field(default=None, alias="originalLine")
    code_snippet: str | None = Field(default=None, alias="codeSnippet")
    message: str = ""
    severity: Severity
    category: str | None = None
    suggested_fix: SuggestedFix | None = Field(default=None, alias="suggestedFix")
    fix_status: FixStatus = Field(default=FixStatus.PENDING, alias="fixStatus")

    @field_validator("suggested_fix", mode="before")
    @classmethod
    def _coerce_suggested_fix(cls, value: Any) -> Any:
        """Accept the reviewer's raw shapes: prose, JSON-in-a-string, or a bare fix object.

        Anything that was meant as a fix but does not validate becomes an
        InvalidFix instead of failing the issue.
        """
        if isinstance(value, str):
            payload = _parse_json_fix(value)
            if payload is not None:
                return _structured_or_invalid(payload)
            return {"kind": "free_text", "description": value}
        if isinstance(value, dict):
            kind = value.get("kind")
            if kind is None:
                return _structured_or_invalid(value)
            if kind == "structured":
                return _structured_or_invalid(value.get("fix"))
            if kind in ("free_text", "invalid"):
                return value
            return {"kind": "invalid", "raw": value, "error": f"unknown fix kind {kind!r}"}
        if value is None or isinstance(value, BaseModel):
            return value
        return {"kind": "invalid", "raw": value, "error": "fix must be a string or an object"}

    @property
    def structured_fix(self) -> CodeFix | None:
        """The appliable fix, or None for free-text or missing suggestions."""
        if isinstance(self.suggested_fix, StructuredFix):
            return self.suggested_fix.fix
        return None

    @property
    def invalid_fix(self) -> InvalidFix | None:
        if isinstance(self.suggested_fix, InvalidFix):
            return self.suggested_fix
        return None

    @property
    def was_corrected(self) -> bool:
        return self.original_line is not None
