"""Structured success/failure results returned by engine operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stakedao.datastructures.governance_errors import GovernanceErrorCode
from stakedao.datastructures.type_aliases import JsonDict


@dataclass(frozen=True, slots=True)
class GovernanceResult[T]:
    """Either a value (``success``) or the specific error kind that rejected the call."""

    success: bool
    value: T | None = None
    error: GovernanceErrorCode | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("Successful result cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("Failed result must carry an error code")

    @classmethod
    def ok(cls, value: T) -> GovernanceResult[T]:
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error: GovernanceErrorCode) -> GovernanceResult[T]:
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the value, raising ``ValueError`` on a failed result."""
        if self.error is not None:
            raise ValueError(f"Operation failed: {self.error.name}")
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> JsonDict:
        payload: dict[str, Any] = {"success": self.success}
        if self.error is None:
            payload["value"] = self.value
        else:
            payload["error"] = self.error.name
            payload["code"] = int(self.error)
        return payload
