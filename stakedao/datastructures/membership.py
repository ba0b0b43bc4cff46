"""
Membership ledger for stake-based DAO membership.

Tracks how much collateral each actor has locked. An actor is a member
exactly while their stake is positive. Collateral itself lives in an external
ledger; this module only asks that ledger to move it into and out of a
per-actor custody account.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger

from .governance_errors import (
    InsufficientBalanceError,
    InsufficientStakeAmountError,
    InvalidMemberIdError,
    LedgerTransferError,
    NotAMemberError,
)
from .type_aliases import AccountId, ActorId, TokenAmount

CUSTODY_SUFFIX = "::stake"


class LedgerAdapter(Protocol):
    """External token ledger that actually holds collateral."""

    def balance_of(self, account: AccountId) -> TokenAmount:
        """Spendable balance of ``account``; unknown accounts hold zero."""
        ...

    def transfer(
        self, sender: AccountId, recipient: AccountId, amount: TokenAmount
    ) -> bool:
        """Move ``amount`` from ``sender`` to ``recipient``; ``False`` if refused."""
        ...


def custody_account(actor: ActorId) -> AccountId:
    """Escrow account holding ``actor``'s locked stake."""
    return f"{actor}{CUSTODY_SUFFIX}"


def is_custody_account(account: AccountId) -> bool:
    return account.endswith(CUSTODY_SUFFIX)


@dataclass(slots=True)
class MembershipLedger:
    """Stake bookkeeping backed by an external ledger adapter."""

    ledger: LedgerAdapter
    min_stake: TokenAmount
    stakes: dict[ActorId, TokenAmount] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.min_stake <= 0:
            raise ValueError("Minimum stake must be positive")

    def join(self, actor: ActorId, amount: TokenAmount) -> TokenAmount:
        """Lock ``amount`` for ``actor`` and return their new total stake."""
        if is_custody_account(actor):
            raise InvalidMemberIdError(f"{actor} names a custody account")
        if amount < self.min_stake:
            raise InsufficientStakeAmountError(
                f"Stake {amount} below minimum {self.min_stake}"
            )
        if self.ledger.balance_of(actor) < amount:
            raise InsufficientBalanceError(f"{actor} cannot cover stake of {amount}")
        if not self.ledger.transfer(actor, custody_account(actor), amount):
            raise InsufficientBalanceError(f"Ledger refused stake deposit for {actor}")

        new_stake = self.stakes.get(actor, 0) + amount
        self.stakes[actor] = new_stake
        logger.debug("{} staked {} (total {})", actor, amount, new_stake)
        return new_stake

    def leave(self, actor: ActorId) -> TokenAmount:
        """Return ``actor``'s entire stake and drop the membership record."""
        stake = self.stakes.get(actor, 0)
        if stake == 0:
            raise NotAMemberError(f"{actor} is not a member")
        if not self.ledger.transfer(custody_account(actor), actor, stake):
            logger.error("Ledger refused refund of {} to {}", stake, actor)
            raise LedgerTransferError(f"Refund of {stake} to {actor} was refused")

        del self.stakes[actor]
        logger.debug("{} left, refunded {}", actor, stake)
        return stake

    def stake_of(self, actor: ActorId) -> TokenAmount:
        return self.stakes.get(actor, 0)

    def is_member(self, actor: ActorId) -> bool:
        return self.stake_of(actor) > 0

    def total_staked(self) -> TokenAmount:
        return sum(self.stakes.values())

    def member_count(self) -> int:
        return len(self.stakes)

    def members(self) -> dict[ActorId, TokenAmount]:
        """Snapshot of current stakes ordered by actor id."""
        return dict(sorted(self.stakes.items()))
