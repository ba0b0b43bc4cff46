"""
Tests for governance record types.

Covers validation of proposals and vote records, the tagged proposal action
variant, and the quorum arithmetic of ``ProposalTally``.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stakedao.datastructures.governance_types import (
    ContentApproval,
    ParameterChange,
    Proposal,
    ProposalKind,
    ProposalTally,
    VoteKey,
    VoteRecord,
    VoteType,
    proposal_action,
    proposal_strategy,
    vote_record_strategy,
)


def make_proposal(**overrides) -> Proposal:
    fields = {
        "proposal_id": 1,
        "creator": "ST1TEST",
        "title": "Test Proposal",
        "description": "Description",
        "start_height": 10,
        "end_height": 1010,
        "action": ContentApproval(),
    }
    fields.update(overrides)
    return Proposal(**fields)


class TestProposalKind:
    """Test proposal type parsing."""

    def test_wire_values(self):
        assert ProposalKind.CONTENT_APPROVAL.value == "content-approval"
        assert ProposalKind.ROYALTY_RATE.value == "royalty-rate"
        assert ProposalKind.PLATFORM_UPGRADE.value == "platform-upgrade"
        assert ProposalKind.QUORUM_CHANGE.value == "quorum-change"
        assert len(ProposalKind) == 4

    def test_parse(self):
        assert ProposalKind.parse("royalty-rate") is ProposalKind.ROYALTY_RATE
        assert ProposalKind.parse(ProposalKind.QUORUM_CHANGE) is ProposalKind.QUORUM_CHANGE
        assert ProposalKind.parse("treasury-spend") is None
        assert ProposalKind.parse("") is None

    def test_only_content_approval_takes_no_parameter(self):
        assert not ProposalKind.CONTENT_APPROVAL.takes_parameter
        assert all(
            kind.takes_parameter
            for kind in ProposalKind
            if kind is not ProposalKind.CONTENT_APPROVAL
        )


class TestProposalAction:
    """Test the tagged proposal action variant."""

    def test_content_approval_drops_parameter(self):
        action = proposal_action(ProposalKind.CONTENT_APPROVAL, 20)
        assert isinstance(action, ContentApproval)
        assert action.kind is ProposalKind.CONTENT_APPROVAL
        assert action.param is None

    def test_parameter_change_keeps_parameter(self):
        action = proposal_action(ProposalKind.ROYALTY_RATE, 20)
        assert action == ParameterChange(kind=ProposalKind.ROYALTY_RATE, value=20)
        assert action.param == 20

    def test_parameter_is_optional(self):
        action = proposal_action(ProposalKind.PLATFORM_UPGRADE)
        assert isinstance(action, ParameterChange)
        assert action.param is None

    def test_parameter_change_rejects_content_approval(self):
        with pytest.raises(ValueError, match="do not take a parameter"):
            ParameterChange(kind=ProposalKind.CONTENT_APPROVAL, value=1)


class TestProposal:
    """Test proposal validation and accumulator updates."""

    @given(proposal_strategy())
    def test_generated_proposals_are_valid(self, proposal: Proposal):
        assert proposal.proposal_id > 0
        assert proposal.end_height > proposal.start_height
        assert proposal.total_votes == proposal.votes_for + proposal.votes_against
        assert not proposal.executed

    def test_validation(self):
        with pytest.raises(ValueError, match="Proposal ID must be positive"):
            make_proposal(proposal_id=0)

        with pytest.raises(ValueError, match="creator cannot be empty"):
            make_proposal(creator="")

        with pytest.raises(ValueError, match="End height must be after start height"):
            make_proposal(start_height=10, end_height=10)

        with pytest.raises(ValueError, match="cannot be negative"):
            make_proposal(votes_for=-1)

    def test_with_vote_adds_to_one_accumulator(self):
        proposal = make_proposal()

        voted_for = proposal.with_vote(True, 1000)
        assert voted_for.votes_for == 1000
        assert voted_for.votes_against == 0

        voted_against = voted_for.with_vote(False, 250)
        assert voted_against.votes_for == 1000
        assert voted_against.votes_against == 250

        # Original record is untouched
        assert proposal.votes_for == 0

    @given(proposal_strategy(), st.booleans(), st.integers(min_value=0, max_value=10**6))
    def test_with_vote_is_monotonic(self, proposal: Proposal, vote_for: bool, weight: int):
        updated = proposal.with_vote(vote_for, weight)
        assert updated.votes_for >= proposal.votes_for
        assert updated.votes_against >= proposal.votes_against
        assert updated.total_votes == proposal.total_votes + weight
        assert updated.proposal_id == proposal.proposal_id
        assert updated.action == proposal.action

    def test_window_includes_end_height(self):
        proposal = make_proposal(start_height=10, end_height=1010)
        assert proposal.is_open(10)
        assert proposal.is_open(1010)
        assert not proposal.has_ended(1010)
        assert proposal.has_ended(1011)
        assert not proposal.is_open(1011)

    def test_to_dict(self):
        proposal = make_proposal(
            action=ParameterChange(kind=ProposalKind.ROYALTY_RATE, value=20)
        )
        payload = proposal.to_dict()
        assert payload["proposal_type"] == "royalty-rate"
        assert payload["param"] == 20
        assert payload["end_height"] == 1010
        assert payload["executed"] is False


class TestVoteRecord:
    """Test vote record validation."""

    @given(vote_record_strategy())
    def test_generated_vote_records_are_valid(self, vote: VoteRecord):
        assert vote.voter
        assert vote.weight >= 0
        assert vote.key == VoteKey(vote.proposal_id, vote.voter)
        assert vote.vote_for == (vote.choice is VoteType.FOR)

    def test_validation(self):
        with pytest.raises(ValueError, match="Voter ID cannot be empty"):
            VoteRecord(proposal_id=1, voter="", choice=VoteType.FOR, weight=1)

        with pytest.raises(ValueError, match="Vote weight cannot be negative"):
            VoteRecord(proposal_id=1, voter="ST1TEST", choice=VoteType.FOR, weight=-5)

    def test_vote_keys_compare_by_value(self):
        assert VoteKey(1, "ST1TEST") == VoteKey(1, "ST1TEST")
        assert VoteKey(1, "ST1TEST") != VoteKey(2, "ST1TEST")
        assert len({VoteKey(1, "ST1TEST"), VoteKey(1, "ST1TEST")}) == 1

    def test_from_bool(self):
        assert VoteType.from_bool(True) is VoteType.FOR
        assert VoteType.from_bool(False) is VoteType.AGAINST


class TestProposalTally:
    """Test quorum and pass arithmetic."""

    def make_tally(self, votes_for: int, votes_against: int, staked: int, threshold: int = 50):
        return ProposalTally(
            proposal_id=1,
            votes_for=votes_for,
            votes_against=votes_against,
            total_votes=votes_for + votes_against,
            total_staked=staked,
            quorum_threshold=threshold,
            voting_closed=False,
        )

    def test_quorum_boundary_is_inclusive(self):
        assert self.make_tally(500, 0, 1000).quorum_reached
        assert not self.make_tally(499, 0, 1000).quorum_reached

    def test_quorum_counts_votes_against(self):
        tally = self.make_tally(100, 400, 1000)
        assert tally.quorum_reached
        assert not tally.passed

    def test_pass_requires_strict_majority(self):
        assert not self.make_tally(500, 500, 1000).passed
        assert self.make_tally(501, 499, 1000).passed

    def test_no_quorum_no_pass(self):
        tally = self.make_tally(300, 0, 1000)
        assert not tally.quorum_reached
        assert not tally.passed

    def test_rates(self):
        tally = self.make_tally(750, 250, 2000)
        assert tally.get_participation_rate() == 0.5
        assert tally.get_approval_rate() == 0.75
        assert self.make_tally(0, 0, 0).get_participation_rate() == 0.0
        assert self.make_tally(0, 0, 100).get_approval_rate() == 0.0

    @given(
        st.integers(min_value=0, max_value=10**6),
        st.integers(min_value=0, max_value=10**6),
        st.integers(min_value=0, max_value=10**6),
        st.integers(min_value=0, max_value=100),
    )
    def test_pass_implies_quorum(self, votes_for, votes_against, extra_stake, threshold):
        tally = self.make_tally(
            votes_for, votes_against, votes_for + votes_against + extra_stake, threshold
        )
        if tally.passed:
            assert tally.quorum_reached
            assert tally.votes_for > tally.votes_against
        assert tally.to_dict()["passed"] == tally.passed
