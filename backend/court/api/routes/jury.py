"""Jury Routes — vote casting, result tallies and a juror's own votes.

Invariants:
    - Every route resolves a Principal first (get_principal)
    - VotingEngine owns eligibility, uniqueness and the vote-then-view gate
"""

from fastapi import APIRouter, Depends, status

from court.api.dependencies import get_principal, get_voting_engine
from court.core.domain_types import CaseId, Principal
from court.schemas.vote import (
    TallyResponse, VoteCast, VoteCastResponse, VoteResponse,
)
from court.services.voting_engine import VotingEngine

router = APIRouter(prefix="/api/v1/jury", tags=["jury"])


@router.post(
    "/cases/{case_id}/vote", response_model=VoteCastResponse,
    status_code=status.HTTP_201_CREATED,
)
async def cast_vote(
    case_id: int,
    body: VoteCast,
    principal: Principal = Depends(get_principal),
    engine: VotingEngine = Depends(get_voting_engine),
):
    vote = await engine.cast_vote(principal, CaseId(case_id), body.verdict)
    return VoteCastResponse(
        message="Vote submitted", vote=VoteResponse.from_record(vote),
    )


@router.get("/cases/{case_id}/results", response_model=TallyResponse)
async def get_results(
    case_id: int,
    principal: Principal = Depends(get_principal),
    engine: VotingEngine = Depends(get_voting_engine),
):
    """Vote tally. Jurors must vote on the case before viewing."""
    tally = await engine.get_results(principal, CaseId(case_id))
    return TallyResponse.from_tally(case_id, tally)


@router.get("/votes/me", response_model=list[VoteResponse])
async def my_votes(
    principal: Principal = Depends(get_principal),
    engine: VotingEngine = Depends(get_voting_engine),
):
    votes = await engine.my_votes(principal)
    return [VoteResponse.from_record(v) for v in votes]
