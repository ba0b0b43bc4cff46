"""
Scripted replay of governance operations.

A replay script lists initial balances and a sequence of steps, each naming
an operation, the calling actor and optionally the block height it runs at.
Replaying builds a fresh in-memory ledger, a manual execution context and an
engine, then applies the steps in order. This is how recorded call traces
are re-checked against the engine outside of any host environment.

Script format::

    {
      "settings": {"min_stake": 1000},
      "balances": {"ST1TEST": 10000},
      "steps": [
        {"op": "join", "caller": "ST1TEST", "amount": 1000},
        {"op": "propose", "caller": "ST1TEST", "title": "T", "description": "D",
         "duration": 1000, "type": "content-approval"},
        {"op": "vote", "caller": "ST1TEST", "height": 10, "proposal_id": 1,
         "vote_for": true},
        {"op": "leave", "caller": "ST1TEST"}
      ]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from stakedao.datastructures.type_aliases import (
    AccountId,
    ActorId,
    BlockHeight,
    JsonDict,
    TokenAmount,
)

from .config import GovernanceSettings
from .context import ManualContext
from .engine import GovernanceEngine
from .ledger import InMemoryLedger
from .result import GovernanceResult

REQUIRED_ARGUMENTS: dict[str, tuple[str, ...]] = {
    "join": ("amount",),
    "leave": (),
    "propose": ("title", "description", "duration", "type"),
    "vote": ("proposal_id", "vote_for"),
}


@dataclass(frozen=True, slots=True)
class ReplayStep:
    """One operation invocation within a script."""

    op: str
    caller: ActorId
    height: BlockHeight | None = None
    arguments: JsonDict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.op not in REQUIRED_ARGUMENTS:
            raise ValueError(f"Unknown replay operation {self.op!r}")
        if not self.caller:
            raise ValueError("Replay step caller cannot be empty")
        if self.height is not None and self.height < 0:
            raise ValueError("Replay step height cannot be negative")
        missing = [k for k in REQUIRED_ARGUMENTS[self.op] if k not in self.arguments]
        if missing:
            raise ValueError(f"{self.op} step missing arguments: {', '.join(missing)}")
        if self.op == "vote" and not isinstance(self.arguments["vote_for"], bool):
            raise ValueError("vote step 'vote_for' must be a JSON boolean")

    @classmethod
    def from_dict(cls, payload: JsonDict) -> ReplayStep:
        height = payload.get("height")
        return cls(
            op=str(payload.get("op", "")),
            caller=str(payload.get("caller", "")),
            height=int(height) if height is not None else None,
            arguments={
                k: v for k, v in payload.items() if k not in {"op", "caller", "height"}
            },
        )

    def to_dict(self) -> JsonDict:
        payload: JsonDict = {"op": self.op, "caller": self.caller}
        if self.height is not None:
            payload["height"] = self.height
        payload.update(self.arguments)
        return payload

    def apply(self, engine: GovernanceEngine) -> GovernanceResult[Any]:
        args = self.arguments
        match self.op:
            case "join":
                return engine.join_dao(int(args["amount"]))
            case "leave":
                return engine.leave_dao()
            case "propose":
                param = args.get("param")
                return engine.create_proposal(
                    str(args["title"]),
                    str(args["description"]),
                    int(args["duration"]),
                    str(args["type"]),
                    int(param) if param is not None else None,
                )
            case "vote":
                return engine.cast_vote(int(args["proposal_id"]), args["vote_for"])
        raise ValueError(f"Unknown replay operation {self.op!r}")


@dataclass(frozen=True, slots=True)
class ReplayScript:
    """Initial balances plus the ordered steps to apply."""

    steps: tuple[ReplayStep, ...]
    balances: dict[AccountId, TokenAmount] = field(default_factory=dict)
    settings: GovernanceSettings | None = None

    @classmethod
    def from_dict(cls, payload: JsonDict) -> ReplayScript:
        raw_steps = payload.get("steps", [])
        if not isinstance(raw_steps, list):
            raise ValueError("Replay script 'steps' must be a list")
        raw_balances = payload.get("balances", {})
        if not isinstance(raw_balances, dict):
            raise ValueError("Replay script 'balances' must be an object")
        raw_settings = payload.get("settings")
        return cls(
            steps=tuple(ReplayStep.from_dict(step) for step in raw_steps),
            balances={
                str(account): int(amount)
                for account, amount in raw_balances.items()
            },
            settings=(
                GovernanceSettings.from_dict(raw_settings)
                if raw_settings is not None
                else None
            ),
        )


@dataclass(frozen=True, slots=True)
class ReplayOutcome:
    """Result of applying one step."""

    index: int
    step: ReplayStep
    height: BlockHeight
    result: GovernanceResult[Any]

    def to_dict(self) -> JsonDict:
        return {
            "index": self.index,
            "step": self.step.to_dict(),
            "height": self.height,
            "result": self.result.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class ReplayReport:
    """All step outcomes plus the final engine and ledger state."""

    outcomes: tuple[ReplayOutcome, ...]
    final_state: JsonDict
    balances: dict[AccountId, TokenAmount]

    @property
    def failures(self) -> list[ReplayOutcome]:
        return [o for o in self.outcomes if not o.result.success]

    def to_dict(self) -> JsonDict:
        return {
            "outcomes": [o.to_dict() for o in self.outcomes],
            "final_state": self.final_state,
            "balances": self.balances,
        }


def load_script(path: str | Path) -> ReplayScript:
    payload = json.loads(Path(path).read_text())
    if not isinstance(payload, dict):
        raise ValueError(f"Replay script {path} must contain a JSON object")
    return ReplayScript.from_dict(payload)


def run_script(
    script: ReplayScript, settings: GovernanceSettings | None = None
) -> ReplayReport:
    """Apply ``script`` to a fresh engine; ``settings`` overrides the script's own."""
    effective = settings or script.settings or GovernanceSettings()
    ledger = InMemoryLedger(balances=dict(script.balances))
    context = ManualContext()
    engine = GovernanceEngine(settings=effective, ledger=ledger, context=context)

    outcomes: list[ReplayOutcome] = []
    for index, step in enumerate(script.steps):
        if step.height is not None:
            context.set_height(step.height)
        with context.acting_as(step.caller):
            result = step.apply(engine)
        outcomes.append(
            ReplayOutcome(
                index=index, step=step, height=context.current_height(), result=result
            )
        )

    logger.info(
        "Replayed {} steps ({} rejected)",
        len(outcomes),
        sum(1 for o in outcomes if not o.result.success),
    )
    return ReplayReport(
        outcomes=tuple(outcomes),
        final_state=engine.to_dict(),
        balances=dict(sorted(ledger.balances.items())),
    )
