"""
stakedao - stake-weighted DAO governance engine.

Members lock collateral to gain voting power, raise proposals, vote within a
bounded block-height window, and outcomes follow from stake-weighted
accumulators measured against a quorum threshold.

## Quick Start

```python
from stakedao import GovernanceEngine, GovernanceSettings, InMemoryLedger, ManualContext

ledger = InMemoryLedger(balances={"ST1TEST": 10000})
context = ManualContext(caller="ST1TEST")
engine = GovernanceEngine(GovernanceSettings(), ledger, context)

engine.join_dao(1000)
proposal_id = engine.create_proposal(
    "Test Proposal", "Description", 1000, "content-approval"
).unwrap()
engine.cast_vote(proposal_id, True)
```
"""

from .core import (
    ExecutionContext,
    GovernanceEngine,
    GovernanceResult,
    GovernanceSettings,
    InMemoryLedger,
    ManualContext,
    configure_logging,
)
from .datastructures import (
    GovernanceError,
    GovernanceErrorCode,
    LedgerAdapter,
    Proposal,
    ProposalKind,
    ProposalTally,
    VoteRecord,
    VoteType,
)

__version__ = "0.1.0"

__all__ = [
    "GovernanceEngine",
    "GovernanceResult",
    "GovernanceSettings",
    "ExecutionContext",
    "ManualContext",
    "InMemoryLedger",
    "LedgerAdapter",
    "configure_logging",
    "GovernanceError",
    "GovernanceErrorCode",
    "Proposal",
    "ProposalKind",
    "ProposalTally",
    "VoteRecord",
    "VoteType",
]
