"""Skill check engine package."""

from skillcheck.engine.check_manager import SkillCheckManager
from skillcheck.engine.dice import DiceRoller, DiceService, fate_die_count, parse_pool_formula, pool_formula
from skillcheck.engine.labels import LabelLookup
from skillcheck.engine.renderer import TemplateRenderer
from skillcheck.engine.resolver import CheckResolver

__all__ = [
    "CheckResolver",
    "DiceRoller",
    "DiceService",
    "LabelLookup",
    "SkillCheckManager",
    "TemplateRenderer",
    "fate_die_count",
    "parse_pool_formula",
    "pool_formula",
]
