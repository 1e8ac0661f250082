"""SQL Vote Store — VoteStore protocol over an AsyncSession.

Invariants:
    - create() relies on the (case_id, juror_id) primary key: a duplicate insert
      raises IntegrityError inside the database and surfaces as ConflictError
    - A vote whose case was deleted underneath it trips the case_id foreign key
      and surfaces as NotFoundError, not as a duplicate
    - Votes are never updated; the only delete is the per-case cascade, which is
      flushed but left for SqlCaseStore.delete to commit

Design Decisions:
    - Core INSERT over session.add(): bypasses the identity map so a duplicate
      always reaches the database constraint instead of failing at ORM flush
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from court.core.domain_types import CaseId, PrincipalId, Verdict, VoteRecord
from court.core.errors import ConflictError, ErrorContext, NotFoundError
from court.models.court_case import CourtCase
from court.models.jury_vote import JuryVote

logger = logging.getLogger(__name__)


def to_vote_record(row: JuryVote) -> VoteRecord:
    return VoteRecord(
        case_id=CaseId(row.case_id),
        juror_id=PrincipalId(row.juror_id),
        verdict=Verdict(row.verdict),
        created_at=row.created_at,
    )


class SqlVoteStore:
    """Vote persistence backed by the jury_votes table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create(
        self, case_id: CaseId, juror_id: PrincipalId, verdict: Verdict,
    ) -> VoteRecord:
        created_at = datetime.now(timezone.utc)
        try:
            await self._db.execute(
                insert(JuryVote).values(
                    case_id=case_id, juror_id=juror_id,
                    verdict=verdict.value, created_at=created_at,
                ),
            )
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(
                f"Vote insert rejected by constraint: {e.orig}",
                extra={"case_id": case_id, "principal_id": juror_id},
            )
            ctx = ErrorContext(case_id=case_id, principal_id=juror_id)
            if not await self._case_exists(case_id):
                raise NotFoundError("Case", str(case_id), context=ctx)
            raise ConflictError(
                f"A vote for case {case_id} by this juror already exists",
                context=ctx,
            )
        return VoteRecord(
            case_id=case_id, juror_id=juror_id,
            verdict=verdict, created_at=created_at,
        )

    async def get(
        self, case_id: CaseId, juror_id: PrincipalId,
    ) -> VoteRecord | None:
        result = await self._db.execute(
            select(JuryVote).where(
                JuryVote.case_id == case_id, JuryVote.juror_id == juror_id,
            ),
        )
        row = result.scalar_one_or_none()
        return to_vote_record(row) if row else None

    async def list_by_case(self, case_id: CaseId) -> list[VoteRecord]:
        result = await self._db.execute(
            select(JuryVote)
            .where(JuryVote.case_id == case_id)
            .order_by(JuryVote.created_at),
        )
        return [to_vote_record(row) for row in result.scalars().all()]

    async def list_by_juror(self, juror_id: PrincipalId) -> list[VoteRecord]:
        result = await self._db.execute(
            select(JuryVote)
            .where(JuryVote.juror_id == juror_id)
            .order_by(JuryVote.case_id.desc()),
        )
        return [to_vote_record(row) for row in result.scalars().all()]

    async def delete_all_for_case(self, case_id: CaseId) -> int:
        # No commit: the case delete that follows commits both or neither
        result = await self._db.execute(
            delete(JuryVote).where(JuryVote.case_id == case_id),
        )
        return result.rowcount or 0

    async def _case_exists(self, case_id: CaseId) -> bool:
        found = await self._db.scalar(
            select(CourtCase.id).where(CourtCase.id == case_id),
        )
        return found is not None
