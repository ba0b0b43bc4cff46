"""In-memory token ledger used as the custody collaborator in tests and replays."""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from stakedao.datastructures.type_aliases import AccountId, JsonDict, TokenAmount


@dataclass(frozen=True, slots=True)
class TransferRecord:
    """A completed ledger transfer."""

    sender: AccountId
    recipient: AccountId
    amount: TokenAmount

    def to_dict(self) -> JsonDict:
        return {"sender": self.sender, "recipient": self.recipient, "amount": self.amount}


@dataclass(slots=True)
class InMemoryLedger:
    """Dictionary-backed balances satisfying ``LedgerAdapter``."""

    balances: dict[AccountId, TokenAmount] = field(default_factory=dict)
    transfers: list[TransferRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if any(amount < 0 for amount in self.balances.values()):
            raise ValueError("Initial balances cannot be negative")

    def balance_of(self, account: AccountId) -> TokenAmount:
        return self.balances.get(account, 0)

    def transfer(
        self, sender: AccountId, recipient: AccountId, amount: TokenAmount
    ) -> bool:
        if amount <= 0 or self.balance_of(sender) < amount:
            logger.debug(
                "Refusing transfer of {} from {} to {}", amount, sender, recipient
            )
            return False

        self.balances[sender] = self.balance_of(sender) - amount
        self.balances[recipient] = self.balance_of(recipient) + amount
        self.transfers.append(TransferRecord(sender, recipient, amount))
        return True

    def mint(self, account: AccountId, amount: TokenAmount) -> None:
        """Credit ``account`` out of thin air; test and replay setup only."""
        if amount < 0:
            raise ValueError("Mint amount cannot be negative")
        self.balances[account] = self.balance_of(account) + amount

    def total_supply(self) -> TokenAmount:
        return sum(self.balances.values())
