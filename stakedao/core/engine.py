"""
Stake-weighted governance engine.

The engine composes the membership ledger, proposal store and vote ledger
under one set of validation rules. It is the only component that consults
the execution context for the current block height and caller. Each public
mutating operation validates everything first and then applies all of its
effects, so a rejected call leaves every store and the custody ledger
exactly as it found them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from stakedao.datastructures.governance_errors import (
    AlreadyVotedError,
    GovernanceError,
    InsufficientStakeError,
    ProposalEndedError,
    ProposalNotFoundError,
)
from stakedao.datastructures.governance_types import (
    Proposal,
    ProposalKind,
    ProposalTally,
    VoteRecord,
    VoteType,
)
from stakedao.datastructures.membership import LedgerAdapter, MembershipLedger
from stakedao.datastructures.proposal_store import ProposalStore
from stakedao.datastructures.type_aliases import (
    ActorId,
    BlockDuration,
    JsonDict,
    ProposalDescription,
    ProposalId,
    ProposalParam,
    ProposalTitle,
    TokenAmount,
    VotingPower,
)
from stakedao.datastructures.vote_ledger import VoteLedger

from .config import GovernanceSettings
from .context import ExecutionContext
from .result import GovernanceResult


@dataclass(slots=True)
class GovernanceEngine:
    """Single-writer owner of all governance state."""

    settings: GovernanceSettings
    ledger: LedgerAdapter
    context: ExecutionContext
    membership: MembershipLedger = field(init=False)
    proposals: ProposalStore = field(init=False)
    votes: VoteLedger = field(init=False)

    def __post_init__(self) -> None:
        self.membership = MembershipLedger(
            ledger=self.ledger, min_stake=self.settings.min_stake
        )
        self.proposals = ProposalStore(max_proposals=self.settings.max_proposals)
        self.votes = VoteLedger()

    def _run[T](self, operation: str, action: Callable[[], T]) -> GovernanceResult[T]:
        try:
            value = action()
        except GovernanceError as e:
            logger.debug("{} rejected: {} ({})", operation, e.code.name, e)
            return GovernanceResult.failure(e.code)
        return GovernanceResult.ok(value)

    # Membership

    def join_dao(self, stake_amount: TokenAmount) -> GovernanceResult[bool]:
        """Lock ``stake_amount`` of the caller's balance as voting stake."""
        caller = self.context.current_caller()

        def _join() -> bool:
            self.membership.join(caller, stake_amount)
            return True

        return self._run("join_dao", _join)

    def leave_dao(self) -> GovernanceResult[bool]:
        """Refund the caller's entire stake and end their membership."""
        caller = self.context.current_caller()

        def _leave() -> bool:
            self.membership.leave(caller)
            return True

        return self._run("leave_dao", _leave)

    # Proposals

    def create_proposal(
        self,
        title: ProposalTitle,
        description: ProposalDescription,
        duration: BlockDuration,
        proposal_type: ProposalKind | str,
        param: ProposalParam | None = None,
    ) -> GovernanceResult[ProposalId]:
        """Open a proposal for voting from the current height for ``duration`` blocks."""
        caller = self.context.current_caller()
        height = self.context.current_height()

        return self._run(
            "create_proposal",
            lambda: self.proposals.create(
                caller,
                title,
                description,
                duration,
                proposal_type,
                param,
                current_height=height,
                creator_stake=self.membership.stake_of(caller),
                min_stake=self.settings.min_stake,
            ),
        )

    def cast_vote(
        self, proposal_id: ProposalId, vote_for: bool | VoteType
    ) -> GovernanceResult[bool]:
        """Record the caller's vote weighted by their current stake."""
        caller = self.context.current_caller()
        height = self.context.current_height()
        choice = (
            vote_for if isinstance(vote_for, VoteType) else VoteType.from_bool(vote_for)
        )

        def _vote() -> bool:
            proposal = self.proposals.get(proposal_id)
            if proposal is None:
                raise ProposalNotFoundError(f"Proposal {proposal_id} not found")
            stake = self.membership.stake_of(caller)
            if stake < self.settings.min_stake:
                raise InsufficientStakeError(
                    f"{caller} holds {stake}, needs {self.settings.min_stake} to vote"
                )
            # The end height itself is still open for voting.
            if proposal.has_ended(height):
                raise ProposalEndedError(
                    f"Proposal {proposal_id} ended at height {proposal.end_height}"
                )
            if self.votes.has_voted(proposal_id, caller):
                raise AlreadyVotedError(
                    f"{caller} has already voted on proposal {proposal_id}"
                )

            self.votes.record(
                VoteRecord(
                    proposal_id=proposal_id,
                    voter=caller,
                    choice=choice,
                    weight=stake,
                    cast_at_height=height,
                )
            )
            self.proposals.record_vote(proposal_id, choice is VoteType.FOR, stake)
            logger.debug(
                "{} voted {} on proposal {} with weight {}",
                caller,
                choice.value,
                proposal_id,
                stake,
            )
            return True

        return self._run("cast_vote", _vote)

    # Read-only queries

    def get_proposal(self, proposal_id: ProposalId) -> Proposal | None:
        return self.proposals.get(proposal_id)

    def get_vote(self, proposal_id: ProposalId, voter: ActorId) -> VoteRecord | None:
        return self.votes.get(proposal_id, voter)

    def get_member_stake(self, actor: ActorId) -> TokenAmount:
        return self.membership.stake_of(actor)

    def get_total_votes(self, proposal_id: ProposalId) -> VotingPower:
        return self.proposals.total_votes(proposal_id)

    def get_proposal_count(self) -> int:
        return self.proposals.count()

    def is_member(self, actor: ActorId) -> bool:
        return self.membership.is_member(actor)

    def get_total_staked(self) -> TokenAmount:
        return self.membership.total_staked()

    def get_active_proposals(self) -> list[Proposal]:
        """Proposals still accepting votes at the current height."""
        return self.proposals.active_at(self.context.current_height())

    def get_proposal_votes(self, proposal_id: ProposalId) -> list[VoteRecord]:
        return self.votes.votes_for_proposal(proposal_id)

    def get_member_voting_history(self, actor: ActorId) -> list[VoteRecord]:
        """Votes cast by ``actor``, most recent first."""
        return sorted(
            self.votes.votes_by(actor), key=lambda v: v.cast_at_height, reverse=True
        )

    # Quorum evaluation

    def tally(self, proposal_id: ProposalId) -> ProposalTally | None:
        """Derive a proposal's outcome against current total stake."""
        proposal = self.proposals.get(proposal_id)
        if proposal is None:
            return None

        return ProposalTally(
            proposal_id=proposal_id,
            votes_for=proposal.votes_for,
            votes_against=proposal.votes_against,
            total_votes=self.proposals.total_votes(proposal_id),
            total_staked=self.membership.total_staked(),
            quorum_threshold=self.settings.quorum_threshold,
            voting_closed=proposal.has_ended(self.context.current_height()),
        )

    def has_reached_quorum(self, proposal_id: ProposalId) -> bool:
        tally = self.tally(proposal_id)
        return tally is not None and tally.quorum_reached

    def has_passed(self, proposal_id: ProposalId) -> bool:
        tally = self.tally(proposal_id)
        return tally is not None and tally.passed

    # Inspection

    def get_statistics(self) -> dict[str, Any]:
        """Summary counters across members, proposals and votes."""
        all_proposals = self.proposals.proposals()
        tallies = [self.tally(p.proposal_id) for p in all_proposals]
        participation = [t.get_participation_rate() for t in tallies if t is not None]

        return {
            "member_count": self.membership.member_count(),
            "total_staked": self.membership.total_staked(),
            "total_proposals": self.proposals.count(),
            "active_proposals": len(self.get_active_proposals()),
            "total_votes_cast": len(self.votes),
            "proposals_reaching_quorum": sum(
                1 for t in tallies if t is not None and t.quorum_reached
            ),
            "avg_participation_rate": (
                sum(participation) / len(participation) if participation else 0.0
            ),
        }

    def validate_integrity(self) -> bool:
        """Check cross-store invariants; ``False`` on the first violation."""
        if any(stake <= 0 for stake in self.membership.stakes.values()):
            return False

        for proposal in self.proposals.proposals():
            if proposal.end_height <= proposal.start_height:
                return False
            total = self.proposals.total_votes(proposal.proposal_id)
            if total != proposal.votes_for + proposal.votes_against:
                return False
            if total != self.votes.weight_of(proposal.proposal_id):
                return False

        for vote in self.votes.records.values():
            if self.proposals.get(vote.proposal_id) is None:
                return False

        return len(self.proposals.records) == self.proposals.count()

    def to_dict(self) -> JsonDict:
        """Snapshot of engine state for inspection and reports."""
        return {
            "settings": self.settings.to_dict(),
            "height": self.context.current_height(),
            "members": self.membership.members(),
            "proposals": [p.to_dict() for p in self.proposals.proposals()],
            "votes": [v.to_dict() for v in self.votes.records.values()],
            "statistics": self.get_statistics(),
        }

    def __str__(self) -> str:
        return (
            f"GovernanceEngine(members={self.membership.member_count()}, "
            f"staked={self.membership.total_staked()}, "
            f"proposals={self.proposals.count()}, votes={len(self.votes)})"
        )
