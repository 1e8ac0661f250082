"""Voting Engine — one verdict per juror per approved case, tallies, vote-then-view.

Invariants:
    - Only APPROVED cases accept votes; eligibility is checked at vote time
    - At most one VoteRecord per (case_id, juror_id); existing votes are never overwritten
    - A juror sees results only for cases they have voted on; judges are not gated
    - get_results always satisfies guilty + not_guilty == total_votes

Design Decisions:
    - The engine pre-checks for an existing vote (DuplicateVoteError) but relies on
      the store's atomic uniqueness for correctness: a lost race surfaces as the
      store's ConflictError, never as a second vote
    - Verdict parsed strictly via parse_verdict: invalid values are rejected, not defaulted
"""

import logging

from court.core.domain_types import (
    Action, CaseId, CaseStatus, Principal, Role, Tally, VoteRecord,
)
from court.core.enforce_case_rules import parse_verdict
from court.core.errors import (
    AuthorizationError, DuplicateVoteError, ErrorContext,
    InvalidStateError, NotFoundError,
)
from court.core.permissions import authorize
from court.core.repository_protocols import CaseStore, VoteStore
from court.core.tally import compute_tally

logger = logging.getLogger(__name__)


class VotingEngine:
    """Jury voting rules over injected case and vote stores."""

    def __init__(self, cases: CaseStore, votes: VoteStore):
        self._cases = cases
        self._votes = votes

    async def cast_vote(
        self, principal: Principal | None, case_id: CaseId, verdict: object,
    ) -> VoteRecord:
        """Record the juror's verdict on an approved case."""
        principal = authorize(principal, Action.CAST_VOTE)
        parsed = parse_verdict(verdict)
        ctx = ErrorContext(
            case_id=case_id, principal_id=principal.id,
            action=Action.CAST_VOTE.value,
        )

        case = await self._cases.get(case_id)
        if case is None:
            raise NotFoundError("Case", str(case_id), context=ctx)
        if case.status != CaseStatus.APPROVED:
            logger.warning(
                f"Vote refused on case {case_id}: status {case.status.value}",
                extra={"case_id": case_id, "principal_id": principal.id},
            )
            raise InvalidStateError(case_id, case.status.value, "vote on", ctx)

        if await self._votes.get(case_id, principal.id) is not None:
            raise DuplicateVoteError(case_id, ctx)

        vote = await self._votes.create(case_id, principal.id, parsed)
        logger.info(
            f"Vote recorded on case {case_id}",
            extra={"case_id": case_id, "principal_id": principal.id},
        )
        return vote

    async def get_results(self, principal: Principal | None, case_id: CaseId) -> Tally:
        """Tally votes for a case. Jurors must have voted first."""
        principal = authorize(principal, Action.VIEW_RESULTS)
        if await self._cases.get(case_id) is None:
            raise NotFoundError(
                "Case", str(case_id), context=ErrorContext(case_id=case_id),
            )
        if principal.role == Role.JUROR:
            own_vote = await self._votes.get(case_id, principal.id)
            if own_vote is None:
                raise AuthorizationError(
                    "You must vote on this case before viewing its results",
                    context=ErrorContext(
                        case_id=case_id, principal_id=principal.id,
                        action=Action.VIEW_RESULTS.value,
                    ),
                )
        return compute_tally(await self._votes.list_by_case(case_id))

    async def my_votes(self, principal: Principal | None) -> list[VoteRecord]:
        principal = authorize(principal, Action.LIST_OWN_VOTES)
        return await self._votes.list_by_juror(principal.id)
