"""Pytest fixtures for stakedao governance tests.

Every test gets a fresh engine wired to an in-memory ledger and a manual
execution context with two funded principals and a minimum stake of 1000.
"""

import sys
from collections.abc import Iterator

import pytest
from loguru import logger

from stakedao.core.config import GovernanceSettings
from stakedao.core.context import ManualContext
from stakedao.core.engine import GovernanceEngine
from stakedao.core.ledger import InMemoryLedger

ALICE = "ST1TEST"
BOB = "ST2TEST"
CAROL = "ST3TEST"


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Keep loguru pointed at the real stderr between tests."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def settings() -> GovernanceSettings:
    return GovernanceSettings(
        min_stake=1000, max_proposals=1000, quorum_threshold=50, treasury=ALICE
    )


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger(balances={ALICE: 10000, BOB: 5000})


@pytest.fixture
def context() -> ManualContext:
    return ManualContext(height=0, caller=ALICE)


@pytest.fixture
def engine(
    settings: GovernanceSettings, ledger: InMemoryLedger, context: ManualContext
) -> GovernanceEngine:
    return GovernanceEngine(settings=settings, ledger=ledger, context=context)
