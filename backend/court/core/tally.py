"""Vote Tally — pure count partition over a case's votes.

Invariants:
    - guilty + not_guilty == total_votes for every input
    - Input order does not affect the result
"""

from collections.abc import Iterable

from court.core.domain_types import Tally, Verdict, VoteRecord


def compute_tally(votes: Iterable[VoteRecord]) -> Tally:
    guilty = 0
    not_guilty = 0
    for vote in votes:
        if vote.verdict == Verdict.GUILTY:
            guilty += 1
        else:
            not_guilty += 1
    return Tally(
        total_votes=guilty + not_guilty, guilty=guilty, not_guilty=not_guilty,
    )
