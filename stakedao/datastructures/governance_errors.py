"""
Governance error taxonomy.

Every validation failure maps to one ``GovernanceErrorCode``. Codes below
120 match the error constants of the on-chain governance contract so results
can be compared against it directly.
"""

from __future__ import annotations

from enum import IntEnum


class GovernanceErrorCode(IntEnum):
    """Recoverable validation failures reported to callers."""

    PROPOSAL_NOT_FOUND = 101
    ALREADY_VOTED = 102
    PROPOSAL_ENDED = 103
    INSUFFICIENT_STAKE = 104
    INVALID_TITLE = 105
    INVALID_DESCRIPTION = 106
    INVALID_DURATION = 107
    INVALID_PROPOSAL_TYPE = 108
    INSUFFICIENT_STAKE_AMOUNT = 112
    NOT_A_MEMBER = 113
    MAX_PROPOSALS_EXCEEDED = 119
    INSUFFICIENT_BALANCE = 120
    INVALID_MEMBER_ID = 121


class GovernanceError(Exception):
    """Base exception for governance validation failures."""

    code: GovernanceErrorCode

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code.name.lower())


class InsufficientStakeAmountError(GovernanceError):
    """Raised when a join amount is below the minimum stake."""

    code = GovernanceErrorCode.INSUFFICIENT_STAKE_AMOUNT


class InsufficientBalanceError(GovernanceError):
    """Raised when the ledger cannot cover a stake deposit."""

    code = GovernanceErrorCode.INSUFFICIENT_BALANCE


class NotAMemberError(GovernanceError):
    """Raised when a non-member tries to leave."""

    code = GovernanceErrorCode.NOT_A_MEMBER


class InvalidMemberIdError(GovernanceError):
    """Raised when a caller id names a custody escrow account."""

    code = GovernanceErrorCode.INVALID_MEMBER_ID


class MaxProposalsExceededError(GovernanceError):
    code = GovernanceErrorCode.MAX_PROPOSALS_EXCEEDED


class InvalidTitleError(GovernanceError):
    code = GovernanceErrorCode.INVALID_TITLE


class InvalidDescriptionError(GovernanceError):
    code = GovernanceErrorCode.INVALID_DESCRIPTION


class InvalidDurationError(GovernanceError):
    code = GovernanceErrorCode.INVALID_DURATION


class InvalidProposalTypeError(GovernanceError):
    code = GovernanceErrorCode.INVALID_PROPOSAL_TYPE


class InsufficientStakeError(GovernanceError):
    """Raised when a proposer or voter holds less than the minimum stake."""

    code = GovernanceErrorCode.INSUFFICIENT_STAKE


class ProposalNotFoundError(GovernanceError):
    code = GovernanceErrorCode.PROPOSAL_NOT_FOUND


class ProposalEndedError(GovernanceError):
    code = GovernanceErrorCode.PROPOSAL_ENDED


class AlreadyVotedError(GovernanceError):
    code = GovernanceErrorCode.ALREADY_VOTED


class LedgerTransferError(Exception):
    """Raised when the custody ledger refuses a transfer that must succeed.

    This is not a validation failure: it means the external ledger no longer
    holds collateral that the membership ledger believes is escrowed.
    """
