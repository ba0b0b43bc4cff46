"""
Governance engine core: configuration, external collaborators and orchestration.
"""

from .config import GovernanceSettings, load_settings
from .context import ExecutionContext, ManualContext
from .engine import GovernanceEngine
from .ledger import InMemoryLedger, TransferRecord
from .logging import configure_logging
from .replay import ReplayReport, ReplayScript, ReplayStep, load_script, run_script
from .result import GovernanceResult

__all__ = [
    "GovernanceEngine",
    "GovernanceResult",
    "GovernanceSettings",
    "load_settings",
    "ExecutionContext",
    "ManualContext",
    "InMemoryLedger",
    "TransferRecord",
    "configure_logging",
    "ReplayScript",
    "ReplayStep",
    "ReplayReport",
    "load_script",
    "run_script",
]
