"""
Semantic type aliases for stakedao datastructures.

These aliases replace raw ``str``/``int`` annotations so that signatures read
in governance terms (who, how much, at which height) rather than primitives.
"""

from typing import Any

# Actors and identifiers
type ActorId = str
type AccountId = str
type ProposalId = int

# Amounts
type TokenAmount = int
type VotingPower = int
type ProposalParam = int

# Time is measured in block heights supplied by the execution environment
type BlockHeight = int
type BlockDuration = int

# Proposal content
type ProposalTitle = str
type ProposalDescription = str

# Percentages are whole numbers in 0..100
type Percentage = int

# Serialization
type JsonDict = dict[str, Any]
