"""
stakedao datastructures.

Leaf components of the governance engine:

- MembershipLedger: actor -> locked stake, backed by an external LedgerAdapter
- ProposalStore: sequential proposal records and total-vote accumulators
- VoteLedger: one vote record per (proposal, voter)
- Governance types and the error taxonomy shared by all of the above
"""

from __future__ import annotations

from .governance_errors import (
    AlreadyVotedError,
    GovernanceError,
    GovernanceErrorCode,
    InsufficientBalanceError,
    InsufficientStakeAmountError,
    InsufficientStakeError,
    InvalidDescriptionError,
    InvalidDurationError,
    InvalidMemberIdError,
    InvalidProposalTypeError,
    InvalidTitleError,
    LedgerTransferError,
    MaxProposalsExceededError,
    NotAMemberError,
    ProposalEndedError,
    ProposalNotFoundError,
)
from .governance_types import (
    ContentApproval,
    ParameterChange,
    Proposal,
    ProposalAction,
    ProposalKind,
    ProposalTally,
    VoteKey,
    VoteRecord,
    VoteType,
    proposal_action,
)
from .membership import (
    LedgerAdapter,
    MembershipLedger,
    custody_account,
    is_custody_account,
)
from .proposal_store import ProposalStore
from .vote_ledger import VoteLedger

__all__ = [
    "MembershipLedger",
    "LedgerAdapter",
    "custody_account",
    "is_custody_account",
    "ProposalStore",
    "VoteLedger",
    "Proposal",
    "ProposalAction",
    "ProposalKind",
    "ContentApproval",
    "ParameterChange",
    "proposal_action",
    "ProposalTally",
    "VoteKey",
    "VoteRecord",
    "VoteType",
    # Errors
    "GovernanceError",
    "GovernanceErrorCode",
    "InsufficientStakeAmountError",
    "InsufficientBalanceError",
    "InvalidMemberIdError",
    "NotAMemberError",
    "MaxProposalsExceededError",
    "InvalidTitleError",
    "InvalidDescriptionError",
    "InvalidDurationError",
    "InvalidProposalTypeError",
    "InsufficientStakeError",
    "ProposalNotFoundError",
    "ProposalEndedError",
    "AlreadyVotedError",
    "LedgerTransferError",
]
