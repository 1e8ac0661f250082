"""ORM Models — SQLAlchemy declarative models for cases and jury votes.

Invariants:
    - All models inherit from Base (db/base.py)
    - CourtCase is the aggregate root; JuryVote rows are scoped by case_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from court.models.court_case import CourtCase  # noqa: F401
from court.models.jury_vote import JuryVote  # noqa: F401
