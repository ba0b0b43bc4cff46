"""
Execution context: where the engine learns the current block height and caller.

The environment hosting the engine supplies both values per invoked
operation. ``ManualContext`` is a settable implementation for tests,
scripted replays and embedding in simulations.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

from stakedao.datastructures.type_aliases import ActorId, BlockDuration, BlockHeight


class ExecutionContext(Protocol):
    """Clock and identity provider consulted once per operation."""

    def current_height(self) -> BlockHeight:
        """Height of the block the operation executes in."""
        ...

    def current_caller(self) -> ActorId:
        """Actor invoking the operation."""
        ...


@dataclass(slots=True)
class ManualContext:
    """Explicitly driven height and caller."""

    height: BlockHeight = 0
    caller: ActorId = ""

    def __post_init__(self) -> None:
        if self.height < 0:
            raise ValueError("Block height cannot be negative")

    def current_height(self) -> BlockHeight:
        return self.height

    def current_caller(self) -> ActorId:
        return self.caller

    def advance(self, blocks: BlockDuration = 1) -> BlockHeight:
        if blocks < 0:
            raise ValueError("Cannot move block height backwards")
        self.height += blocks
        return self.height

    def set_height(self, height: BlockHeight) -> None:
        if height < 0:
            raise ValueError("Block height cannot be negative")
        self.height = height

    @contextmanager
    def acting_as(self, caller: ActorId) -> Iterator[ManualContext]:
        """Temporarily switch the caller, restoring the previous one afterwards."""
        previous = self.caller
        self.caller = caller
        try:
            yield self
        finally:
            self.caller = previous
