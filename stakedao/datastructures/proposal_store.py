"""
Proposal store.

Owns proposal records, the running proposal counter and the per-proposal
total-votes accumulator. Ids are assigned sequentially from 1 and are never
reused. Creation validates in a fixed order so a rejection always reports
the first failing condition.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from .governance_errors import (
    InsufficientStakeError,
    InvalidDescriptionError,
    InvalidDurationError,
    InvalidProposalTypeError,
    InvalidTitleError,
    MaxProposalsExceededError,
    ProposalNotFoundError,
)
from .governance_types import (
    DESCRIPTION_MAX_LENGTH,
    MAX_PROPOSAL_DURATION,
    MIN_PROPOSAL_DURATION,
    TITLE_MAX_LENGTH,
    Proposal,
    ProposalKind,
    proposal_action,
)
from .type_aliases import (
    ActorId,
    BlockDuration,
    BlockHeight,
    ProposalDescription,
    ProposalId,
    ProposalParam,
    ProposalTitle,
    TokenAmount,
    VotingPower,
)


@dataclass(slots=True)
class ProposalStore:
    """Proposal records keyed by sequential id."""

    max_proposals: int
    proposal_count: int = 0
    records: dict[ProposalId, Proposal] = field(default_factory=dict)
    total_votes_by_id: dict[ProposalId, VotingPower] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_proposals <= 0:
            raise ValueError("Maximum proposal count must be positive")

    def create(
        self,
        creator: ActorId,
        title: ProposalTitle,
        description: ProposalDescription,
        duration: BlockDuration,
        proposal_type: ProposalKind | str,
        param: ProposalParam | None = None,
        *,
        current_height: BlockHeight,
        creator_stake: TokenAmount,
        min_stake: TokenAmount,
    ) -> ProposalId:
        """Validate and store a new proposal, returning its id."""
        if self.proposal_count >= self.max_proposals:
            raise MaxProposalsExceededError(
                f"Proposal limit of {self.max_proposals} reached"
            )
        if not 1 <= len(title) <= TITLE_MAX_LENGTH:
            raise InvalidTitleError(f"Title length {len(title)} out of range")
        if not 1 <= len(description) <= DESCRIPTION_MAX_LENGTH:
            raise InvalidDescriptionError(
                f"Description length {len(description)} out of range"
            )
        if not MIN_PROPOSAL_DURATION <= duration <= MAX_PROPOSAL_DURATION:
            raise InvalidDurationError(f"Duration {duration} out of range")
        kind = ProposalKind.parse(proposal_type)
        if kind is None:
            raise InvalidProposalTypeError(f"Unknown proposal type {proposal_type!r}")
        if creator_stake < min_stake:
            raise InsufficientStakeError(
                f"{creator} holds {creator_stake}, needs {min_stake} to propose"
            )

        proposal_id = self.proposal_count + 1
        self.records[proposal_id] = Proposal(
            proposal_id=proposal_id,
            creator=creator,
            title=title,
            description=description,
            start_height=current_height,
            end_height=current_height + duration,
            action=proposal_action(kind, param),
        )
        self.total_votes_by_id[proposal_id] = 0
        self.proposal_count = proposal_id
        logger.debug(
            "Proposal {} ({}) created by {}, open until height {}",
            proposal_id,
            kind.value,
            creator,
            current_height + duration,
        )
        return proposal_id

    def get(self, proposal_id: ProposalId) -> Proposal | None:
        return self.records.get(proposal_id)

    def count(self) -> int:
        return self.proposal_count

    def total_votes(self, proposal_id: ProposalId) -> VotingPower:
        return self.total_votes_by_id.get(proposal_id, 0)

    def record_vote(
        self, proposal_id: ProposalId, vote_for: bool, weight: VotingPower
    ) -> Proposal:
        """Add ``weight`` to the proposal's accumulators and return the new record."""
        proposal = self.records.get(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(f"Proposal {proposal_id} not found")

        updated = proposal.with_vote(vote_for, weight)
        self.records[proposal_id] = updated
        self.total_votes_by_id[proposal_id] = self.total_votes(proposal_id) + weight
        return updated

    def proposals(self) -> list[Proposal]:
        """All proposals in creation order."""
        return [self.records[pid] for pid in sorted(self.records)]

    def active_at(self, height: BlockHeight) -> list[Proposal]:
        return [p for p in self.proposals() if p.is_open(height)]
