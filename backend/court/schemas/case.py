"""Case Schemas — Pydantic models for case endpoints.

Invariants:
    - CaseSubmit carries the three required text fields plus an optional file handle
    - CaseEdit forbids unknown fields; the core whitelist is still authoritative
    - CaseResponse mirrors CaseRecord field-for-field

Design Decisions:
    - Emptiness is NOT checked here: the core raises ValidationError for blank
      text so HTTP and direct callers see the same error
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from court.core.domain_types import CaseRecord, CaseStatus


class CaseSubmit(BaseModel):
    """Case submission by a DEFENDANT or PLAINTIFF."""
    title: str = Field(max_length=200)
    argument: str = Field(max_length=20_000)
    evidence_text: str = Field(max_length=20_000)
    evidence_file: str | None = Field(None, max_length=500)


class CaseEdit(BaseModel):
    """Judge's partial update. Only supplied fields are applied."""
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, max_length=200)
    argument: str | None = Field(None, max_length=20_000)
    evidence_text: str | None = Field(None, max_length=20_000)
    evidence_file: str | None = Field(None, max_length=500)
    status: CaseStatus | None = None


class CaseResponse(BaseModel):
    """Case response — public-facing case data."""
    id: int
    title: str
    argument: str
    evidence_text: str
    evidence_file: str | None
    status: CaseStatus
    submitted_by_id: str
    submitted_by_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: CaseRecord) -> "CaseResponse":
        return cls(
            id=record.id,
            title=record.title,
            argument=record.argument,
            evidence_text=record.evidence_text,
            evidence_file=record.evidence_file,
            status=record.status,
            submitted_by_id=record.submitted_by_id,
            submitted_by_name=record.submitted_by_name,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class CaseMutationResponse(BaseModel):
    message: str
    case: CaseResponse
