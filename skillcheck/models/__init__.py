"""Data models module for the skill-check engine."""

# Dice and results
from skillcheck.models.check import (
    CheckConfig,
    CheckDifficulty,
    CheckOutcome,
    CheckResult,
    DieResult,
    DieType,
    ParsedDie,
    RealizedPool,
)

# Records
from skillcheck.models.record import CheckRecord, RollMode

__all__ = [
    # Dice and results
    "CheckConfig",
    "CheckDifficulty",
    "CheckOutcome",
    "CheckResult",
    "DieResult",
    "DieType",
    "ParsedDie",
    "RealizedPool",
    # Records
    "CheckRecord",
    "RollMode",
]
