from votechain.domain.value_objects.candidate_listing import (
    CandidateListing,
    CandidateReadFailure,
)
from votechain.domain.value_objects.election_handle import ElectionHandle
from votechain.domain.value_objects.election_state import ElectionState
from votechain.domain.value_objects.election_window import ElectionWindow
from votechain.domain.value_objects.session import Session
from votechain.domain.value_objects.vote_receipt import VoteReceipt


__all__ = [
    "CandidateListing",
    "CandidateReadFailure",
    "ElectionHandle",
    "ElectionState",
    "ElectionWindow",
    "Session",
    "VoteReceipt",
]
