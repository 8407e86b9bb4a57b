"""Skill-check resolution and chat-card engine for a five-die pool ruleset."""

from skillcheck.exceptions import DiceFormulaError, RecordNotFoundError, SkillCheckError

__all__ = ["DiceFormulaError", "RecordNotFoundError", "SkillCheckError"]

__version__ = "0.1.0"
