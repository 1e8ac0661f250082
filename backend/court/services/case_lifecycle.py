"""Case Lifecycle — submission, judge decisions, edits, deletion and visibility-filtered reads.

Invariants:
    - Every operation authorizes first (authorize() from core/permissions.py)
    - A submitted case always starts PENDING and records its submitter permanently
    - Only JUDGE mutates status or text after creation
    - Jurors never observe a case whose status is not APPROVED
    - remove() deletes the case's votes before the case itself, in one unit of
      work: the vote delete is only made durable by the case delete

Design Decisions:
    - Stores injected at construction: production wires SQL stores per request,
      tests wire in-memory fakes (ADR: no global ORM client)
    - approve/reject stay idempotent: re-deciding a decided case just re-sets
      status and logs the re-decision
    - Concurrent judge mutations are last-write-wins; no locking here
"""

import logging

from court.core.domain_types import (
    Action, CaseFilter, CaseId, CaseRecord, CaseStatus, Principal,
)
from court.core.enforce_case_rules import (
    effective_status_filter, is_visible_to, parse_status, require_text,
    validate_edit_fields, validate_submission,
)
from court.core.errors import ErrorContext, NotFoundError
from court.core.permissions import authorize
from court.core.repository_protocols import CaseStore, VoteStore

logger = logging.getLogger(__name__)


class CaseLifecycle:
    """State machine and authorization rules for court cases."""

    def __init__(self, cases: CaseStore, votes: VoteStore):
        self._cases = cases
        self._votes = votes

    async def submit(
        self,
        principal: Principal | None,
        title: str | None,
        argument: str | None,
        evidence_text: str | None,
        evidence_file: str | None = None,
    ) -> CaseRecord:
        """Create a new PENDING case owned by the submitting party."""
        principal = authorize(principal, Action.SUBMIT_CASE)
        fields = validate_submission(title, argument, evidence_text, evidence_file)
        fields.update(
            status=CaseStatus.PENDING,
            submitted_by_id=principal.id,
            submitted_by_name=principal.name,
        )
        case = await self._cases.create(fields)
        logger.info(
            f"Case {case.id} submitted (pending judge approval)",
            extra={"case_id": case.id, "principal_id": principal.id},
        )
        return case

    async def list_cases(
        self,
        principal: Principal | None,
        status_filter: CaseStatus | str | None = None,
    ) -> list[CaseRecord]:
        """List cases newest-first; jurors are pinned to APPROVED."""
        principal = authorize(principal, Action.LIST_CASES)
        requested = None if status_filter is None else parse_status(status_filter)
        status = effective_status_filter(principal.role, requested)
        return await self._cases.find(CaseFilter(status=status))

    async def find_by_submitter_name(
        self, principal: Principal | None, name_pattern: str | None,
    ) -> list[CaseRecord]:
        principal = authorize(principal, Action.SEARCH_BY_SUBMITTER)
        pattern = require_text("name", name_pattern)
        return await self._cases.find(
            CaseFilter(status=CaseStatus.APPROVED, submitter_name=pattern),
        )

    async def get(self, principal: Principal | None, case_id: CaseId) -> CaseRecord:
        """Fetch one case. Non-approved cases are reported missing to jurors."""
        principal = authorize(principal, Action.VIEW_CASE)
        case = await self._get_or_404(case_id)
        if not is_visible_to(principal.role, case.status):
            raise NotFoundError("Case", str(case_id))
        return case

    async def edit(
        self, principal: Principal | None, case_id: CaseId, fields: dict,
    ) -> CaseRecord:
        """Apply a whitelisted partial update."""
        principal = authorize(principal, Action.EDIT_CASE)
        await self._get_or_404(case_id)
        cleaned = validate_edit_fields(fields)
        updated = await self._update_or_404(case_id, cleaned)
        logger.info(
            f"Case {case_id} edited: {', '.join(sorted(cleaned))}",
            extra={"case_id": case_id, "principal_id": principal.id},
        )
        return updated

    async def approve(self, principal: Principal | None, case_id: CaseId) -> CaseRecord:
        principal = authorize(principal, Action.APPROVE_CASE)
        return await self._decide(principal, case_id, CaseStatus.APPROVED)

    async def reject(self, principal: Principal | None, case_id: CaseId) -> CaseRecord:
        principal = authorize(principal, Action.REJECT_CASE)
        return await self._decide(principal, case_id, CaseStatus.REJECTED)

    async def remove(self, principal: Principal | None, case_id: CaseId) -> None:
        """Delete a case and cascade its votes."""
        principal = authorize(principal, Action.DELETE_CASE)
        await self._get_or_404(case_id)
        removed_votes = await self._votes.delete_all_for_case(case_id)
        if not await self._cases.delete(case_id):
            raise NotFoundError("Case", str(case_id))
        logger.info(
            f"Case {case_id} deleted with {removed_votes} vote(s)",
            extra={"case_id": case_id, "principal_id": principal.id},
        )

    # ─── Helpers ─────────────────────────────────────────────────

    async def _decide(
        self, principal: Principal, case_id: CaseId, status: CaseStatus,
    ) -> CaseRecord:
        current = await self._get_or_404(case_id)
        if current.status != CaseStatus.PENDING:
            logger.info(
                f"Case {case_id} re-decided: {current.status.value} -> {status.value}",
                extra={"case_id": case_id, "principal_id": principal.id},
            )
        updated = await self._update_or_404(case_id, {"status": status})
        logger.info(
            f"Case {case_id} {status.value.lower()}",
            extra={"case_id": case_id, "principal_id": principal.id},
        )
        return updated

    async def _get_or_404(self, case_id: CaseId) -> CaseRecord:
        case = await self._cases.get(case_id)
        if case is None:
            raise NotFoundError(
                "Case", str(case_id), context=ErrorContext(case_id=case_id),
            )
        return case

    async def _update_or_404(self, case_id: CaseId, fields: dict) -> CaseRecord:
        # Row may vanish between get and update under a concurrent delete
        updated = await self._cases.update(case_id, fields)
        if updated is None:
            raise NotFoundError(
                "Case", str(case_id), context=ErrorContext(case_id=case_id),
            )
        return updated
