"""Case Rule Enforcement — tests for pure input validation and visibility rules.

Tests cover:
    - validate_submission strips text, rejects blank fields and enforces column widths
    - validate_edit_fields enforces the whitelist and valid status
    - parse_verdict never coerces unknown values
    - effective_status_filter pins jurors to APPROVED
"""

import pytest

from court.core.domain_types import CaseStatus, Role, Verdict
from court.core.enforce_case_rules import (
    effective_status_filter,
    is_visible_to,
    parse_status,
    parse_verdict,
    validate_edit_fields,
    validate_submission,
)
from court.core.errors import ValidationError


# ─── validate_submission ─────────────────────────────────────────

def test_submission_strips_whitespace():
    fields = validate_submission("  Title ", "Argument\n", "\tEvidence")
    assert fields == {
        "title": "Title", "argument": "Argument", "evidence_text": "Evidence",
        "evidence_file": None,
    }


@pytest.mark.parametrize("title,argument,evidence,bad_field", [
    ("", "a", "e", "title"),
    ("t", "   ", "e", "argument"),
    ("t", "a", None, "evidence_text"),
])
def test_submission_rejects_blank_required_fields(title, argument, evidence, bad_field):
    with pytest.raises(ValidationError) as exc_info:
        validate_submission(title, argument, evidence)
    assert exc_info.value.field == bad_field


@pytest.mark.parametrize("field,limit", [
    ("title", 200), ("argument", 20_000), ("evidence_text", 20_000),
])
def test_submission_enforces_max_length(field, limit):
    values = {"title": "t", "argument": "a", "evidence_text": "e"}
    values[field] = "x" * limit
    assert validate_submission(**values)[field] == "x" * limit

    values[field] = "x" * (limit + 1)
    with pytest.raises(ValidationError) as exc_info:
        validate_submission(**values)
    assert exc_info.value.field == field


def test_submission_checks_evidence_file_length():
    assert validate_submission("t", "a", "e", "f-1")["evidence_file"] == "f-1"
    with pytest.raises(ValidationError) as exc_info:
        validate_submission("t", "a", "e", "f" * 501)
    assert exc_info.value.field == "evidence_file"


# ─── validate_edit_fields ────────────────────────────────────────

def test_edit_accepts_whitelisted_fields():
    cleaned = validate_edit_fields({"title": " New ", "status": "APPROVED"})
    assert cleaned == {"title": "New", "status": CaseStatus.APPROVED}


def test_edit_rejects_submitter_reassignment():
    with pytest.raises(ValidationError) as exc_info:
        validate_edit_fields({"submitted_by_id": "someone-else"})
    assert exc_info.value.field == "submitted_by_id"


def test_edit_rejects_id_change():
    with pytest.raises(ValidationError):
        validate_edit_fields({"id": 99})


def test_edit_rejects_invalid_status():
    with pytest.raises(ValidationError) as exc_info:
        validate_edit_fields({"status": "ARCHIVED"})
    assert exc_info.value.field == "status"


def test_edit_rejects_blanking_required_text():
    with pytest.raises(ValidationError):
        validate_edit_fields({"argument": "  "})


def test_edit_rejects_overlong_title():
    with pytest.raises(ValidationError) as exc_info:
        validate_edit_fields({"title": "x" * 201})
    assert exc_info.value.field == "title"


def test_edit_rejects_empty_update():
    with pytest.raises(ValidationError):
        validate_edit_fields({})


def test_edit_clears_evidence_file_with_empty_string():
    assert validate_edit_fields({"evidence_file": ""}) == {"evidence_file": None}


# ─── parse_status / parse_verdict ────────────────────────────────

def test_parse_status_accepts_enum_and_string():
    assert parse_status(CaseStatus.REJECTED) is CaseStatus.REJECTED
    assert parse_status("PENDING") is CaseStatus.PENDING


@pytest.mark.parametrize("raw", ["GUILTY", Verdict.NOT_GUILTY])
def test_parse_verdict_accepts_valid_values(raw):
    assert isinstance(parse_verdict(raw), Verdict)


@pytest.mark.parametrize("raw", ["guilty", "INNOCENT", "", None, 1])
def test_parse_verdict_rejects_anything_else(raw):
    with pytest.raises(ValidationError) as exc_info:
        parse_verdict(raw)
    assert exc_info.value.field == "verdict"


# ─── visibility ──────────────────────────────────────────────────

@pytest.mark.parametrize("requested", [None, CaseStatus.PENDING, CaseStatus.REJECTED])
def test_juror_filter_always_approved(requested):
    assert effective_status_filter(Role.JUROR, requested) is CaseStatus.APPROVED


@pytest.mark.parametrize("role", [Role.JUDGE, Role.PLAINTIFF, Role.DEFENDANT])
def test_other_roles_keep_requested_filter(role):
    assert effective_status_filter(role, None) is None
    assert effective_status_filter(role, CaseStatus.PENDING) is CaseStatus.PENDING


def test_is_visible_to():
    assert is_visible_to(Role.JUROR, CaseStatus.APPROVED)
    assert not is_visible_to(Role.JUROR, CaseStatus.PENDING)
    assert is_visible_to(Role.JUDGE, CaseStatus.REJECTED)
