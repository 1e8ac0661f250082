"""SQL Case Store — CaseStore protocol over an AsyncSession.

Invariants:
    - Returns frozen CaseRecord snapshots, never ORM rows
    - find() orders newest-first (id desc)
    - Submitter-name match is a case-insensitive substring with LIKE wildcards escaped
    - Each write commits immediately (one logical operation per request);
      delete() also commits the vote cascade staged earlier in the same session
"""

from enum import Enum

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from court.core.domain_types import (
    CaseFilter, CaseId, CaseRecord, CaseStatus, PrincipalId,
)
from court.models.court_case import CourtCase


def _column_value(value: object) -> object:
    return value.value if isinstance(value, Enum) else value


def to_case_record(row: CourtCase) -> CaseRecord:
    return CaseRecord(
        id=CaseId(row.id),
        title=row.title,
        argument=row.argument,
        evidence_text=row.evidence_text,
        evidence_file=row.evidence_file,
        status=CaseStatus(row.status),
        submitted_by_id=PrincipalId(row.submitted_by_id),
        submitted_by_name=row.submitted_by_name,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlCaseStore:
    """Case persistence backed by the court_cases table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create(self, fields: dict) -> CaseRecord:
        row = CourtCase(**{k: _column_value(v) for k, v in fields.items()})
        self._db.add(row)
        await self._db.commit()
        await self._db.refresh(row)
        return to_case_record(row)

    async def get(self, case_id: CaseId) -> CaseRecord | None:
        row = await self._fetch(case_id)
        return to_case_record(row) if row else None

    async def find(self, case_filter: CaseFilter) -> list[CaseRecord]:
        query = select(CourtCase).order_by(CourtCase.id.desc())
        if case_filter.status is not None:
            query = query.where(CourtCase.status == case_filter.status.value)
        if case_filter.submitter_name:
            query = query.where(
                func.lower(CourtCase.submitted_by_name).contains(
                    case_filter.submitter_name.lower(), autoescape=True,
                ),
            )
        result = await self._db.execute(query)
        return [to_case_record(row) for row in result.scalars().all()]

    async def update(self, case_id: CaseId, fields: dict) -> CaseRecord | None:
        row = await self._fetch(case_id)
        if row is None:
            return None
        for name, value in fields.items():
            setattr(row, name, _column_value(value))
        await self._db.commit()
        await self._db.refresh(row)
        return to_case_record(row)

    async def delete(self, case_id: CaseId) -> bool:
        row = await self._fetch(case_id)
        if row is None:
            return False
        await self._db.delete(row)
        await self._db.commit()
        return True

    async def _fetch(self, case_id: CaseId) -> CourtCase | None:
        result = await self._db.execute(
            select(CourtCase).where(CourtCase.id == case_id),
        )
        return result.scalar_one_or_none()
