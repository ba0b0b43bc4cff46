"""
Governance type definitions.

Records kept by the governance stores: proposals with their tagged action,
vote records keyed by (proposal, voter), and the derived tally used for
quorum evaluation. All records are immutable; stores replace them rather
than mutating in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hypothesis import strategies as st

from .type_aliases import (
    ActorId,
    BlockHeight,
    JsonDict,
    Percentage,
    ProposalDescription,
    ProposalId,
    ProposalParam,
    ProposalTitle,
    TokenAmount,
    VotingPower,
)

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
MIN_PROPOSAL_DURATION = 100
MAX_PROPOSAL_DURATION = 10000


class ProposalKind(Enum):
    """Fixed set of proposal types accepted by the DAO."""

    CONTENT_APPROVAL = "content-approval"
    ROYALTY_RATE = "royalty-rate"
    PLATFORM_UPGRADE = "platform-upgrade"
    QUORUM_CHANGE = "quorum-change"

    @classmethod
    def parse(cls, value: ProposalKind | str) -> ProposalKind | None:
        """Resolve an enum member or wire string, ``None`` if unknown."""
        if isinstance(value, ProposalKind):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def takes_parameter(self) -> bool:
        return self is not ProposalKind.CONTENT_APPROVAL


class VoteType(Enum):
    """Direction of a cast vote."""

    FOR = "for"
    AGAINST = "against"

    @classmethod
    def from_bool(cls, vote_for: bool) -> VoteType:
        return cls.FOR if vote_for else cls.AGAINST


@dataclass(frozen=True, slots=True)
class ContentApproval:
    """Proposal asking members to approve content; carries no parameter."""

    @property
    def kind(self) -> ProposalKind:
        return ProposalKind.CONTENT_APPROVAL

    @property
    def param(self) -> ProposalParam | None:
        return None


@dataclass(frozen=True, slots=True)
class ParameterChange:
    """Proposal targeting a numeric platform parameter."""

    kind: ProposalKind
    value: ProposalParam | None = None

    def __post_init__(self) -> None:
        if not self.kind.takes_parameter:
            raise ValueError(f"{self.kind.value} proposals do not take a parameter")

    @property
    def param(self) -> ProposalParam | None:
        return self.value


type ProposalAction = ContentApproval | ParameterChange


def proposal_action(
    kind: ProposalKind, param: ProposalParam | None = None
) -> ProposalAction:
    """Build the action variant for ``kind``; content approvals drop ``param``."""
    if kind.takes_parameter:
        return ParameterChange(kind=kind, value=param)
    return ContentApproval()


@dataclass(frozen=True, slots=True)
class Proposal:
    """A time-windowed decision record with stake-weighted accumulators."""

    proposal_id: ProposalId
    creator: ActorId
    title: ProposalTitle
    description: ProposalDescription
    start_height: BlockHeight
    end_height: BlockHeight
    action: ProposalAction
    votes_for: VotingPower = 0
    votes_against: VotingPower = 0
    executed: bool = False

    def __post_init__(self) -> None:
        """Validate proposal record."""
        if self.proposal_id <= 0:
            raise ValueError("Proposal ID must be positive")
        if not self.creator:
            raise ValueError("Proposal creator cannot be empty")
        if self.start_height < 0:
            raise ValueError("Start height cannot be negative")
        if self.end_height <= self.start_height:
            raise ValueError("End height must be after start height")
        if self.votes_for < 0 or self.votes_against < 0:
            raise ValueError("Vote accumulators cannot be negative")

    @property
    def proposal_type(self) -> ProposalKind:
        return self.action.kind

    @property
    def param(self) -> ProposalParam | None:
        return self.action.param

    @property
    def total_votes(self) -> VotingPower:
        return self.votes_for + self.votes_against

    def is_open(self, height: BlockHeight) -> bool:
        """Voting is accepted from the start height up to and including the end height."""
        return self.start_height <= height <= self.end_height

    def has_ended(self, height: BlockHeight) -> bool:
        return height > self.end_height

    def with_vote(self, vote_for: bool, weight: VotingPower) -> Proposal:
        """Create new proposal with ``weight`` added to one accumulator."""
        if weight < 0:
            raise ValueError("Vote weight cannot be negative")
        return Proposal(
            proposal_id=self.proposal_id,
            creator=self.creator,
            title=self.title,
            description=self.description,
            start_height=self.start_height,
            end_height=self.end_height,
            action=self.action,
            votes_for=self.votes_for + (weight if vote_for else 0),
            votes_against=self.votes_against + (0 if vote_for else weight),
            executed=self.executed,
        )

    def to_dict(self) -> JsonDict:
        return {
            "proposal_id": self.proposal_id,
            "creator": self.creator,
            "title": self.title,
            "description": self.description,
            "start_height": self.start_height,
            "end_height": self.end_height,
            "votes_for": self.votes_for,
            "votes_against": self.votes_against,
            "executed": self.executed,
            "proposal_type": self.proposal_type.value,
            "param": self.param,
        }


@dataclass(frozen=True, slots=True)
class VoteKey:
    """Composite key identifying one member's vote on one proposal."""

    proposal_id: ProposalId
    voter: ActorId


@dataclass(frozen=True, slots=True)
class VoteRecord:
    """Individual vote; weight is the voter's stake at the moment of casting."""

    proposal_id: ProposalId
    voter: ActorId
    choice: VoteType
    weight: VotingPower
    cast_at_height: BlockHeight = 0

    def __post_init__(self) -> None:
        """Validate vote record."""
        if not self.voter:
            raise ValueError("Voter ID cannot be empty")
        if self.weight < 0:
            raise ValueError("Vote weight cannot be negative")
        if self.cast_at_height < 0:
            raise ValueError("Cast height cannot be negative")

    @property
    def key(self) -> VoteKey:
        return VoteKey(proposal_id=self.proposal_id, voter=self.voter)

    @property
    def vote_for(self) -> bool:
        return self.choice is VoteType.FOR

    def to_dict(self) -> JsonDict:
        return {
            "proposal_id": self.proposal_id,
            "voter": self.voter,
            "vote": self.vote_for,
            "weight": self.weight,
            "cast_at_height": self.cast_at_height,
        }


@dataclass(frozen=True, slots=True)
class ProposalTally:
    """Outcome of a proposal derived from its accumulators."""

    proposal_id: ProposalId
    votes_for: VotingPower
    votes_against: VotingPower
    total_votes: VotingPower
    total_staked: TokenAmount
    quorum_threshold: Percentage
    voting_closed: bool

    @property
    def quorum_reached(self) -> bool:
        # Integer cross-multiplication keeps percentage semantics exact.
        return self.total_votes * 100 >= self.quorum_threshold * self.total_staked

    @property
    def passed(self) -> bool:
        return self.quorum_reached and self.votes_for > self.votes_against

    def get_participation_rate(self) -> float:
        """Share of currently staked collateral that has voted."""
        if self.total_staked == 0:
            return 0.0
        return self.total_votes / self.total_staked

    def get_approval_rate(self) -> float:
        if self.total_votes == 0:
            return 0.0
        return self.votes_for / self.total_votes

    def to_dict(self) -> JsonDict:
        return {
            "proposal_id": self.proposal_id,
            "votes_for": self.votes_for,
            "votes_against": self.votes_against,
            "total_votes": self.total_votes,
            "total_staked": self.total_staked,
            "quorum_threshold": self.quorum_threshold,
            "quorum_reached": self.quorum_reached,
            "passed": self.passed,
            "voting_closed": self.voting_closed,
        }


# Hypothesis strategies for property-based testing


def actor_id_strategy() -> st.SearchStrategy[ActorId]:
    """Generate principal-like actor identifiers."""
    return st.from_regex(r"\AST[0-9A-Z]{3,12}\Z", fullmatch=True)


def proposal_action_strategy() -> st.SearchStrategy[ProposalAction]:
    """Generate valid proposal action variants."""
    return st.one_of(
        st.just(ContentApproval()),
        st.builds(
            ParameterChange,
            kind=st.sampled_from(
                [kind for kind in ProposalKind if kind.takes_parameter]
            ),
            value=st.one_of(st.none(), st.integers(min_value=0, max_value=100)),
        ),
    )


def proposal_strategy() -> st.SearchStrategy[Proposal]:
    """Generate valid Proposal instances for testing."""

    @st.composite
    def generate_valid_proposal(draw):
        start_height = draw(st.integers(min_value=0, max_value=1_000_000))
        duration = draw(
            st.integers(min_value=MIN_PROPOSAL_DURATION, max_value=MAX_PROPOSAL_DURATION)
        )
        return Proposal(
            proposal_id=draw(st.integers(min_value=1, max_value=10_000)),
            creator=draw(actor_id_strategy()),
            title=draw(st.text(min_size=1, max_size=TITLE_MAX_LENGTH)),
            description=draw(st.text(min_size=1, max_size=DESCRIPTION_MAX_LENGTH)),
            start_height=start_height,
            end_height=start_height + duration,
            action=draw(proposal_action_strategy()),
            votes_for=draw(st.integers(min_value=0, max_value=1_000_000)),
            votes_against=draw(st.integers(min_value=0, max_value=1_000_000)),
        )

    return generate_valid_proposal()


def vote_record_strategy() -> st.SearchStrategy[VoteRecord]:
    """Generate valid VoteRecord instances for testing."""
    return st.builds(
        VoteRecord,
        proposal_id=st.integers(min_value=1, max_value=10_000),
        voter=actor_id_strategy(),
        choice=st.sampled_from(VoteType),
        weight=st.integers(min_value=0, max_value=1_000_000),
        cast_at_height=st.integers(min_value=0, max_value=1_000_000),
    )
