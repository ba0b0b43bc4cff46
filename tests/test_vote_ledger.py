"""Tests for the vote ledger."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stakedao.datastructures.governance_errors import AlreadyVotedError
from stakedao.datastructures.governance_types import VoteRecord, VoteType
from stakedao.datastructures.vote_ledger import VoteLedger


def vote(proposal_id: int, voter: str, vote_for: bool = True, weight: int = 1000):
    return VoteRecord(
        proposal_id=proposal_id,
        voter=voter,
        choice=VoteType.from_bool(vote_for),
        weight=weight,
    )


class TestVoteLedger:
    """Test vote recording and lookup."""

    def test_empty(self):
        ledger = VoteLedger()
        assert len(ledger) == 0
        assert ledger.get(1, "ST1TEST") is None
        assert not ledger.has_voted(1, "ST1TEST")
        assert ledger.weight_of(1) == 0

    def test_record_and_lookup(self):
        ledger = VoteLedger()
        ledger.record(vote(1, "ST1TEST", True, 1000))

        assert ledger.has_voted(1, "ST1TEST")
        assert not ledger.has_voted(2, "ST1TEST")
        assert not ledger.has_voted(1, "ST2TEST")
        record = ledger.get(1, "ST1TEST")
        assert record is not None
        assert record.vote_for
        assert record.weight == 1000

    def test_duplicate_rejected(self):
        ledger = VoteLedger()
        ledger.record(vote(1, "ST1TEST", True))

        with pytest.raises(AlreadyVotedError):
            ledger.record(vote(1, "ST1TEST", False))

        assert len(ledger) == 1
        assert ledger.get(1, "ST1TEST").vote_for

    def test_same_voter_on_different_proposals(self):
        ledger = VoteLedger()
        ledger.record(vote(1, "ST1TEST"))
        ledger.record(vote(2, "ST1TEST", False))

        assert [v.proposal_id for v in ledger.votes_by("ST1TEST")] == [1, 2]
        assert len(ledger.votes_for_proposal(1)) == 1

    def test_votes_kept_in_cast_order(self):
        ledger = VoteLedger()
        for voter in ["ST3TEST", "ST1TEST", "ST2TEST"]:
            ledger.record(vote(1, voter))
        assert [v.voter for v in ledger.votes_for_proposal(1)] == [
            "ST3TEST",
            "ST1TEST",
            "ST2TEST",
        ]

    @given(
        st.lists(
            st.tuples(
                st.integers(min_value=1, max_value=3),
                st.sampled_from(["ST1TEST", "ST2TEST", "ST3TEST"]),
                st.integers(min_value=0, max_value=5000),
            ),
            max_size=40,
        )
    )
    def test_at_most_one_vote_per_key(self, attempts):
        ledger = VoteLedger()
        accepted: dict[tuple[int, str], int] = {}

        for proposal_id, voter, weight in attempts:
            try:
                ledger.record(vote(proposal_id, voter, weight=weight))
                accepted[(proposal_id, voter)] = weight
            except AlreadyVotedError:
                assert (proposal_id, voter) in accepted

        assert len(ledger) == len(accepted)
        for proposal_id in (1, 2, 3):
            assert ledger.weight_of(proposal_id) == sum(
                w for (pid, _), w in accepted.items() if pid == proposal_id
            )
