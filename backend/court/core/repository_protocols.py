"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - VoteStore.create is atomic with respect to (case_id, juror_id) uniqueness
      and raises ConflictError on a duplicate pair, NotFoundError when the case
      no longer exists
    - VoteStore.delete_all_for_case does not commit on its own; it becomes
      durable together with the CaseStore.delete that follows it

Design Decisions:
    - Protocol over ABC: structural subtyping, so SQL stores and in-memory
      test fakes satisfy the contract without a shared base class
    - Async in Protocol: boundary methods are async because implementations do IO;
      the pure checks in core/ are never async themselves
"""

from typing import Protocol

from court.core.domain_types import (
    CaseFilter, CaseId, CaseRecord, PrincipalId, Verdict, VoteRecord,
)


class CaseStore(Protocol):
    """Contract for case persistence — implemented by shell."""
    async def create(self, fields: dict) -> CaseRecord: ...
    async def get(self, case_id: CaseId) -> CaseRecord | None: ...
    async def find(self, case_filter: CaseFilter) -> list[CaseRecord]: ...
    async def update(self, case_id: CaseId, fields: dict) -> CaseRecord | None: ...
    async def delete(self, case_id: CaseId) -> bool: ...


class VoteStore(Protocol):
    """Contract for jury vote persistence — implemented by shell."""
    async def create(
        self, case_id: CaseId, juror_id: PrincipalId, verdict: Verdict,
    ) -> VoteRecord: ...
    async def get(
        self, case_id: CaseId, juror_id: PrincipalId,
    ) -> VoteRecord | None: ...
    async def list_by_case(self, case_id: CaseId) -> list[VoteRecord]: ...
    async def list_by_juror(self, juror_id: PrincipalId) -> list[VoteRecord]: ...
    async def delete_all_for_case(self, case_id: CaseId) -> int: ...
