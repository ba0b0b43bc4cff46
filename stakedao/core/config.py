"""Global governance configuration."""

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from stakedao.datastructures.type_aliases import (
    AccountId,
    JsonDict,
    Percentage,
    TokenAmount,
)


@dataclass(slots=True)
class GovernanceSettings:
    """Process-wide settings read by every governance operation."""

    min_stake: TokenAmount = 1000
    max_proposals: int = 1000
    quorum_threshold: Percentage = 50
    treasury: AccountId = "treasury"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate governance settings."""
        if self.min_stake <= 0:
            raise ValueError("Minimum stake must be positive")
        if self.max_proposals <= 0:
            raise ValueError("Maximum proposal count must be positive")
        if not (0 <= self.quorum_threshold <= 100):
            raise ValueError("Quorum threshold must be between 0 and 100")
        if not self.treasury:
            raise ValueError("Treasury account cannot be empty")

    def to_dict(self) -> JsonDict:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: JsonDict) -> "GovernanceSettings":
        defaults = cls()
        return cls(
            min_stake=int(payload.get("min_stake", defaults.min_stake)),
            max_proposals=int(payload.get("max_proposals", defaults.max_proposals)),
            quorum_threshold=int(
                payload.get("quorum_threshold", defaults.quorum_threshold)
            ),
            treasury=str(payload.get("treasury", defaults.treasury)),
            log_level=str(payload.get("log_level", defaults.log_level)),
        )


def load_settings(path: str | Path) -> GovernanceSettings:
    """Read settings from a JSON file; missing keys keep their defaults."""
    payload = json.loads(Path(path).read_text())
    if not isinstance(payload, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")
    return GovernanceSettings.from_dict(payload)
