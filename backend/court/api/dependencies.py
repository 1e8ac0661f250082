"""Request Dependencies — principal resolution and per-request service wiring.

Invariants:
    - A missing Authorization header raises AuthenticationError (401), not a 403
    - Services are built per request around the request's AsyncSession

Design Decisions:
    - HTTPBearer(auto_error=False): we raise our own AuthenticationError so the
      response uses the standard error envelope
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from court.config import get_settings
from court.core.domain_types import Principal
from court.core.errors import AuthenticationError
from court.infrastructure.auth import decode_principal
from court.infrastructure.case_repository import SqlCaseStore
from court.infrastructure.database import get_db
from court.infrastructure.vote_repository import SqlVoteStore
from court.services.case_lifecycle import CaseLifecycle
from court.services.voting_engine import VotingEngine

_bearer = HTTPBearer(auto_error=False)


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Principal:
    """Resolve the bearer token into the calling Principal."""
    if creds is None or not creds.credentials:
        raise AuthenticationError("Missing or invalid Authorization header")
    settings = get_settings()
    return decode_principal(
        creds.credentials,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
    )


def get_case_lifecycle(db: AsyncSession = Depends(get_db)) -> CaseLifecycle:
    return CaseLifecycle(SqlCaseStore(db), SqlVoteStore(db))


def get_voting_engine(db: AsyncSession = Depends(get_db)) -> VotingEngine:
    return VotingEngine(SqlCaseStore(db), SqlVoteStore(db))
