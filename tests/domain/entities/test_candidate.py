"""Candidateエンティティのテスト."""

from votechain.domain.entities.candidate import Candidate


class TestCandidate:
    def test_initialization(self) -> None:
        candidate = Candidate(id=1, name="Ada", party="Indep")

        assert candidate.id == 1
        assert candidate.name == "Ada"
        assert candidate.party == "Indep"
        assert candidate.vote_count == 0

    def test_str(self) -> None:
        candidate = Candidate(id=2, name="Grace", party="Indep", vote_count=3)
        assert str(candidate) == "#2 Grace (Indep) - 3票"

    def test_equality_is_by_id(self) -> None:
        a = Candidate(id=1, name="Ada", party="Indep", vote_count=0)
        b = Candidate(id=1, name="Ada", party="Indep", vote_count=5)

        assert a == b
        assert not a.same_record(b)

    def test_same_record(self) -> None:
        a = Candidate(id=1, name="Ada", party="Indep", vote_count=1)
        b = Candidate(id=1, name="Ada", party="Indep", vote_count=1)
        assert a.same_record(b)
