"""Case Rule Enforcement — input validation and visibility rules for case operations.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Required text fields are non-empty after stripping
    - Text never exceeds FIELD_MAX_LENGTHS (the column widths in models/court_case.py)
    - Only whitelisted fields are editable; submitter and id never are
    - A juror's effective status filter is always APPROVED

Design Decisions:
    - Raise ValidationError (not return dicts): the services propagate these
      straight to the HTTP error handler
    - Edit whitelist is explicit: unknown fields are rejected, never passed through
"""

from court.core.domain_types import CaseStatus, Role, Verdict
from court.core.errors import ValidationError

REQUIRED_TEXT_FIELDS = ("title", "argument", "evidence_text")
EDITABLE_FIELDS = frozenset({
    "title", "argument", "evidence_text", "evidence_file", "status",
})
FIELD_MAX_LENGTHS = {
    "title": 200,
    "argument": 20_000,
    "evidence_text": 20_000,
    "evidence_file": 500,
}


def _check_length(field: str, value: str) -> str:
    limit = FIELD_MAX_LENGTHS.get(field)
    if limit is not None and len(value) > limit:
        raise ValidationError(
            f"{field} must be at most {limit} characters (got {len(value)})", field,
        )
    return value


def require_text(field: str, value: str | None) -> str:
    """Return the stripped value or raise if it is missing/blank/too long."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required and cannot be empty", field)
    return _check_length(field, str(value).strip())


def optional_text(field: str, value: str | None) -> str | None:
    """Empty or missing becomes None; anything else is length-checked."""
    if not value:
        return None
    return _check_length(field, str(value))


def validate_submission(
    title: str | None,
    argument: str | None,
    evidence_text: str | None,
    evidence_file: str | None = None,
) -> dict:
    """Validate the text fields of a new case."""
    return {
        "title": require_text("title", title),
        "argument": require_text("argument", argument),
        "evidence_text": require_text("evidence_text", evidence_text),
        "evidence_file": optional_text("evidence_file", evidence_file),
    }


def parse_status(value: object) -> CaseStatus:
    """Coerce a raw value into a CaseStatus or raise ValidationError."""
    if isinstance(value, CaseStatus):
        return value
    try:
        return CaseStatus(value)
    except ValueError:
        raise ValidationError(
            f"Invalid status '{value}'. Expected one of: "
            f"{', '.join(s.value for s in CaseStatus)}",
            "status",
        )


def parse_verdict(value: object) -> Verdict:
    """Coerce a raw value into a Verdict or raise ValidationError. Never defaults."""
    if isinstance(value, Verdict):
        return value
    try:
        return Verdict(value)
    except ValueError:
        raise ValidationError(
            f"Invalid verdict '{value}'. Expected GUILTY or NOT_GUILTY",
            "verdict",
        )


def validate_edit_fields(fields: dict) -> dict:
    """Filter a partial update down to valid, normalized editable values."""
    if not fields:
        raise ValidationError("No fields supplied for update", "fields")
    unknown = sorted(set(fields) - EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(
            f"Fields not editable: {', '.join(unknown)}", unknown[0],
        )
    cleaned: dict = {}
    for name, value in fields.items():
        if name in REQUIRED_TEXT_FIELDS:
            cleaned[name] = require_text(name, value)
        elif name == "status":
            cleaned[name] = parse_status(value)
        else:
            cleaned[name] = optional_text(name, value)
    return cleaned


def effective_status_filter(
    role: Role, requested: CaseStatus | None,
) -> CaseStatus | None:
    """Jurors only ever see APPROVED cases; everyone else gets what they asked for."""
    if role == Role.JUROR:
        return CaseStatus.APPROVED
    return requested


def is_visible_to(role: Role, status: CaseStatus) -> bool:
    return role != Role.JUROR or status == CaseStatus.APPROVED
