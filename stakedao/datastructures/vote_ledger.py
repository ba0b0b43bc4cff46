"""Vote ledger: at most one vote record per (proposal, voter)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .governance_errors import AlreadyVotedError
from .governance_types import VoteKey, VoteRecord
from .type_aliases import ActorId, ProposalId, VotingPower


@dataclass(slots=True)
class VoteLedger:
    """Cast votes keyed by ``VoteKey``, kept in cast order."""

    records: dict[VoteKey, VoteRecord] = field(default_factory=dict)

    def has_voted(self, proposal_id: ProposalId, voter: ActorId) -> bool:
        return VoteKey(proposal_id, voter) in self.records

    def get(self, proposal_id: ProposalId, voter: ActorId) -> VoteRecord | None:
        return self.records.get(VoteKey(proposal_id, voter))

    def record(self, vote: VoteRecord) -> None:
        if vote.key in self.records:
            raise AlreadyVotedError(
                f"{vote.voter} has already voted on proposal {vote.proposal_id}"
            )
        self.records[vote.key] = vote

    def votes_for_proposal(self, proposal_id: ProposalId) -> list[VoteRecord]:
        return [v for v in self.records.values() if v.proposal_id == proposal_id]

    def votes_by(self, voter: ActorId) -> list[VoteRecord]:
        return [v for v in self.records.values() if v.voter == voter]

    def weight_of(self, proposal_id: ProposalId) -> VotingPower:
        """Sum of recorded vote weights for ``proposal_id``."""
        return sum(v.weight for v in self.votes_for_proposal(proposal_id))

    def __len__(self) -> int:
        return len(self.records)
