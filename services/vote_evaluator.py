"""
Vote toggling rules for a single dish.

A voter has at most one vote per dish. Voting the same value twice removes the
vote (toggle off); voting the other value moves the vote from one counter to
the other.
"""

from typing import Any, Dict, Mapping, NamedTuple

from app.exceptions import InvalidVoteError
from core.utils.helpers import as_count
from domain.enums import VoteValue


class VoteTally(NamedTuple):
    """Vote-related fields of a dish after a vote was applied"""

    good: int
    bad: int
    user_votes: Dict[str, str]


def validate_vote(requested_vote: Any) -> str:
    """Return the vote as a plain string, or raise InvalidVoteError"""
    if isinstance(requested_vote, VoteValue):
        return requested_vote.value
    if requested_vote not in VoteValue.values():
        raise InvalidVoteError(requested_vote)
    return requested_vote


def evaluate(dish: Mapping[str, Any], voter_id: str, requested_vote: Any) -> VoteTally:
    """
    Compute the next good/bad counters and vote ledger of a dish.

    The input mapping is never modified. Missing counters count as 0 and a
    missing ledger as empty.

    Args:
        dish: Current dish record (only good, bad and userVotes are read)
        voter_id: Identifier of the voter, usually an email address
        requested_vote: "good" or "bad"

    Returns:
        VoteTally with the new counters and ledger

    Raises:
        InvalidVoteError: If requested_vote is not a recognized vote value
    """
    vote = validate_vote(requested_vote)

    counts = {
        VoteValue.GOOD.value: as_count(dish.get("good")),
        VoteValue.BAD.value: as_count(dish.get("bad")),
    }
    user_votes = dict(dish.get("userVotes") or {})
    previous_vote = user_votes.get(voter_id)

    # Retract the previous vote, never below zero
    if previous_vote in counts:
        counts[previous_vote] = max(0, counts[previous_vote] - 1)

    if previous_vote != vote:
        counts[vote] += 1
        user_votes[voter_id] = vote
    else:
        # Same vote again: toggle off
        del user_votes[voter_id]

    return VoteTally(
        good=counts[VoteValue.GOOD.value],
        bad=counts[VoteValue.BAD.value],
        user_votes=user_votes,
    )
