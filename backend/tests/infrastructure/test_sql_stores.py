"""SQL Stores — CaseStore / VoteStore over an in-memory SQLite database.

Tests cover:
    - create/get/find/update/delete round trips through CaseRecord
    - find() ordering, status filter and escaped case-insensitive name match
    - duplicate (case_id, juror_id) insert surfaces as ConflictError
    - a vote for a missing case surfaces as NotFoundError
    - delete_all_for_case removes only that case's votes, durable only with the case delete
    - CaseLifecycle over the SQL stores: string status filter, all-or-nothing remove
"""

import pytest

from court.core.domain_types import (
    CaseFilter, CaseId, CaseStatus, PrincipalId, Verdict,
)
from court.core.errors import ConflictError, DatabaseError, NotFoundError
from court.infrastructure.case_repository import SqlCaseStore
from court.infrastructure.vote_repository import SqlVoteStore
from court.services.case_lifecycle import CaseLifecycle


def _case_fields(title="Title", name="Gordon Ramsay", status=CaseStatus.PENDING):
    return {
        "title": title,
        "argument": "argument",
        "evidence_text": "evidence",
        "evidence_file": None,
        "status": status,
        "submitted_by_id": PrincipalId("u-1"),
        "submitted_by_name": name,
    }


@pytest.fixture
def case_store(test_db):
    return SqlCaseStore(test_db)


@pytest.fixture
def vote_store(test_db):
    return SqlVoteStore(test_db)


# ─── SqlCaseStore ────────────────────────────────────────────────

async def test_create_and_get(case_store):
    created = await case_store.create(_case_fields())
    fetched = await case_store.get(created.id)
    assert fetched == created
    assert fetched.status == CaseStatus.PENDING
    assert fetched.created_at is not None


async def test_get_missing_returns_none(case_store):
    assert await case_store.get(CaseId(123)) is None


async def test_find_orders_newest_first_and_filters_status(case_store):
    first = await case_store.create(_case_fields("first"))
    second = await case_store.create(_case_fields("second", status=CaseStatus.APPROVED))

    everything = await case_store.find(CaseFilter())
    assert [c.id for c in everything] == [second.id, first.id]

    approved = await case_store.find(CaseFilter(status=CaseStatus.APPROVED))
    assert [c.id for c in approved] == [second.id]


async def test_find_by_submitter_name_case_insensitive(case_store):
    ramsay = await case_store.create(_case_fields(name="Gordon Ramsay"))
    await case_store.create(_case_fields(name="Julia Child"))

    found = await case_store.find(CaseFilter(submitter_name="rAmSaY"))
    assert [c.id for c in found] == [ramsay.id]


async def test_find_by_submitter_name_escapes_wildcards(case_store):
    await case_store.create(_case_fields(name="Gordon Ramsay"))
    assert await case_store.find(CaseFilter(submitter_name="%")) == []
    assert await case_store.find(CaseFilter(submitter_name="_")) == []


async def test_update_applies_enum_and_text(case_store):
    created = await case_store.create(_case_fields())
    updated = await case_store.update(
        created.id, {"status": CaseStatus.REJECTED, "title": "New title"},
    )
    assert updated.status == CaseStatus.REJECTED
    assert updated.title == "New title"
    assert (await case_store.get(created.id)).status == CaseStatus.REJECTED


async def test_update_missing_returns_none(case_store):
    assert await case_store.update(CaseId(9), {"title": "x"}) is None


async def test_delete(case_store):
    created = await case_store.create(_case_fields())
    assert await case_store.delete(created.id) is True
    assert await case_store.get(created.id) is None
    assert await case_store.delete(created.id) is False


# ─── SqlVoteStore ────────────────────────────────────────────────

async def test_vote_create_and_get(case_store, vote_store):
    case = await case_store.create(_case_fields(status=CaseStatus.APPROVED))
    vote = await vote_store.create(case.id, PrincipalId("j1"), Verdict.GUILTY)
    fetched = await vote_store.get(case.id, PrincipalId("j1"))
    assert fetched.verdict == Verdict.GUILTY
    assert fetched.case_id == vote.case_id
    assert await vote_store.get(case.id, PrincipalId("j2")) is None


async def test_duplicate_vote_raises_conflict_and_keeps_first(case_store, vote_store):
    case = await case_store.create(_case_fields(status=CaseStatus.APPROVED))
    await vote_store.create(case.id, PrincipalId("j1"), Verdict.GUILTY)

    with pytest.raises(ConflictError):
        await vote_store.create(case.id, PrincipalId("j1"), Verdict.NOT_GUILTY)

    votes = await vote_store.list_by_case(case.id)
    assert [v.verdict for v in votes] == [Verdict.GUILTY]


async def test_duplicate_vote_from_second_session_conflicts(test_session_factory):
    async with test_session_factory() as first_db:
        case = await SqlCaseStore(first_db).create(
            _case_fields(status=CaseStatus.APPROVED),
        )
        await SqlVoteStore(first_db).create(case.id, PrincipalId("j1"), Verdict.GUILTY)

    async with test_session_factory() as second_db:
        with pytest.raises(ConflictError):
            await SqlVoteStore(second_db).create(
                case.id, PrincipalId("j1"), Verdict.NOT_GUILTY,
            )


async def test_list_by_juror_and_delete_all_for_case(case_store, vote_store):
    first = await case_store.create(_case_fields("first", status=CaseStatus.APPROVED))
    second = await case_store.create(_case_fields("second", status=CaseStatus.APPROVED))
    await vote_store.create(first.id, PrincipalId("j1"), Verdict.GUILTY)
    await vote_store.create(second.id, PrincipalId("j1"), Verdict.NOT_GUILTY)
    await vote_store.create(first.id, PrincipalId("j2"), Verdict.NOT_GUILTY)

    mine = await vote_store.list_by_juror(PrincipalId("j1"))
    assert {v.case_id for v in mine} == {first.id, second.id}

    removed = await vote_store.delete_all_for_case(first.id)
    assert removed == 2
    assert await vote_store.list_by_case(first.id) == []
    assert len(await vote_store.list_by_case(second.id)) == 1


async def test_vote_for_missing_case_is_not_found(vote_store):
    with pytest.raises(NotFoundError):
        await vote_store.create(CaseId(404), PrincipalId("j1"), Verdict.GUILTY)
    assert await vote_store.list_by_juror(PrincipalId("j1")) == []


async def test_vote_after_case_deleted_in_other_session_is_not_found(
    test_session_factory,
):
    async with test_session_factory() as db:
        case = await SqlCaseStore(db).create(_case_fields(status=CaseStatus.APPROVED))
    async with test_session_factory() as db:
        assert await SqlCaseStore(db).delete(case.id)

    async with test_session_factory() as db:
        with pytest.raises(NotFoundError):
            await SqlVoteStore(db).create(case.id, PrincipalId("j1"), Verdict.GUILTY)


# ─── CaseLifecycle over SQL ──────────────────────────────────────

async def test_list_cases_with_string_status_filter(case_store, vote_store, judge):
    lifecycle = CaseLifecycle(case_store, vote_store)
    pending = await case_store.create(_case_fields("pending"))
    await case_store.create(_case_fields("approved", status=CaseStatus.APPROVED))

    cases = await lifecycle.list_cases(judge, "PENDING")
    assert [c.id for c in cases] == [pending.id]


async def test_remove_commits_case_and_votes_together(test_session_factory, judge):
    async with test_session_factory() as db:
        case = await SqlCaseStore(db).create(_case_fields(status=CaseStatus.APPROVED))
        await SqlVoteStore(db).create(case.id, PrincipalId("j1"), Verdict.GUILTY)

    async with test_session_factory() as db:
        await CaseLifecycle(SqlCaseStore(db), SqlVoteStore(db)).remove(judge, case.id)

    async with test_session_factory() as db:
        assert await SqlCaseStore(db).get(case.id) is None
        assert await SqlVoteStore(db).list_by_case(case.id) == []


async def test_failed_case_delete_keeps_votes(test_session_factory, judge, monkeypatch):
    async with test_session_factory() as db:
        case = await SqlCaseStore(db).create(_case_fields(status=CaseStatus.APPROVED))
        await SqlVoteStore(db).create(case.id, PrincipalId("j1"), Verdict.GUILTY)

    async def failing_delete(case_id):
        raise DatabaseError("Connection or operational error", "execute")

    async with test_session_factory() as db:
        cases = SqlCaseStore(db)
        monkeypatch.setattr(cases, "delete", failing_delete)
        with pytest.raises(DatabaseError):
            await CaseLifecycle(cases, SqlVoteStore(db)).remove(judge, case.id)

    async with test_session_factory() as db:
        assert (await SqlCaseStore(db).get(case.id)).status == CaseStatus.APPROVED
        assert len(await SqlVoteStore(db).list_by_case(case.id)) == 1
