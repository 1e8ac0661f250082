"""Service test fixtures — lifecycle and voting engine over shared in-memory stores."""

import pytest

from court.services.case_lifecycle import CaseLifecycle
from court.services.voting_engine import VotingEngine
from tests.services.fake_stores import InMemoryCaseStore, InMemoryVoteStore


@pytest.fixture
def case_store():
    return InMemoryCaseStore()


@pytest.fixture
def vote_store(case_store):
    return InMemoryVoteStore(case_store)


@pytest.fixture
def lifecycle(case_store, vote_store):
    return CaseLifecycle(case_store, vote_store)


@pytest.fixture
def engine(case_store, vote_store):
    return VotingEngine(case_store, vote_store)


@pytest.fixture
async def approved_case(lifecycle, plaintiff, judge):
    """A case submitted by the plaintiff and approved by the judge."""
    case = await lifecycle.submit(
        plaintiff, "Stolen recipe", "They copied my soufflé", "Photos of both dishes",
    )
    return await lifecycle.approve(judge, case.id)
