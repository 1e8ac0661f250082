"""Domain Types — roles, statuses, verdicts and the immutable records passed across the core.

Invariants:
    - Role, CaseStatus, Verdict are closed enums — no raw string matching in domain logic
    - CaseRecord and VoteRecord are frozen: stores hand out snapshots, never live rows
    - A Principal's role is fixed for its lifetime

Design Decisions:
    - str Enums with upper-case values: serialize to JSON without custom encoders
      and match the values persisted in the status/verdict columns
    - Records as frozen dataclasses over ORM objects: core never touches SQLAlchemy
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PrincipalId = NewType("PrincipalId", str)
CaseId = NewType("CaseId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """The four participant roles. Exactly one per principal."""
    DEFENDANT = "DEFENDANT"
    PLAINTIFF = "PLAINTIFF"
    JUDGE = "JUDGE"
    JUROR = "JUROR"


class CaseStatus(str, Enum):
    """Case lifecycle states — maps to DB `status` column."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Verdict(str, Enum):
    """A juror's binary decision."""
    GUILTY = "GUILTY"
    NOT_GUILTY = "NOT_GUILTY"


class Action(str, Enum):
    """Every intent a principal can present to the lifecycle or voting engine."""
    SUBMIT_CASE = "submit_case"
    LIST_CASES = "list_cases"
    VIEW_CASE = "view_case"
    SEARCH_BY_SUBMITTER = "search_by_submitter"
    EDIT_CASE = "edit_case"
    APPROVE_CASE = "approve_case"
    REJECT_CASE = "reject_case"
    DELETE_CASE = "delete_case"
    CAST_VOTE = "cast_vote"
    VIEW_RESULTS = "view_results"
    LIST_OWN_VOTES = "list_own_votes"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Principal:
    """An authenticated actor, resolved by the authentication collaborator."""
    id: PrincipalId
    role: Role
    name: str


@dataclass(frozen=True)
class CaseRecord:
    id: CaseId
    title: str
    argument: str
    evidence_text: str
    evidence_file: str | None
    status: CaseStatus
    submitted_by_id: PrincipalId
    submitted_by_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class VoteRecord:
    case_id: CaseId
    juror_id: PrincipalId
    verdict: Verdict
    created_at: datetime | None = None


@dataclass(frozen=True)
class CaseFilter:
    """Store-level listing filter. None means 'no constraint'."""
    status: CaseStatus | None = None
    submitter_name: str | None = None


@dataclass(frozen=True)
class Tally:
    """Aggregate vote counts for one case. guilty + not_guilty == total_votes."""
    total_votes: int
    guilty: int
    not_guilty: int
