"""Dice pool formulas and the default dice service."""

import logging
import random
import re
from typing import Optional, Protocol

from skillcheck.config import ATTRIBUTE_DIE_FACES, FATE_DIE_FACES, POOL_SIZE
from skillcheck.exceptions import DiceFormulaError
from skillcheck.models.check import RealizedPool

logger = logging.getLogger(__name__.split(".")[-1])

_POOL_PATTERN = re.compile(r"^\{(.*)\}$")
_TERM_PATTERN = re.compile(r"^(\d+)d(\d+)$")


class DiceService(Protocol):
    """Anything that can realize a compound pool formula in one roll."""

    def realize(self, formula: str) -> RealizedPool: ...


def fate_die_count(attribute_dice: int) -> int:
    """Fate dice filling the pool up to five dice."""
    return max(POOL_SIZE - attribute_dice, 0)


def pool_formula(attribute_dice: int, fate_dice: int) -> str:
    """
    Build the compound formula for an attribute/fate pool.

    Args:
        attribute_dice: Number of d10s, clamped to zero
        fate_dice: Number of d6s, clamped to zero

    Returns:
        Formula such as ``{3d10, 2d6}``
    """
    return (
        f"{{{max(attribute_dice, 0)}d{ATTRIBUTE_DIE_FACES}, "
        f"{max(fate_dice, 0)}d{FATE_DIE_FACES}}}"
    )


def parse_pool_formula(formula: str) -> list[tuple[int, int]]:
    """
    Parse a compound formula into (count, faces) sub-pools.

    Raises:
        DiceFormulaError: If the formula is not a braced list of NdM terms
    """
    match = _POOL_PATTERN.match(formula.strip())
    if not match:
        raise DiceFormulaError(f"Not a pool formula: {formula!r}")

    terms = []
    for raw_term in match.group(1).split(","):
        term = _TERM_PATTERN.match(raw_term.strip())
        if not term:
            raise DiceFormulaError(f"Invalid term {raw_term.strip()!r} in {formula!r}")
        count, faces = int(term.group(1)), int(term.group(2))
        if faces < 1:
            raise DiceFormulaError(f"Die with no faces in {formula!r}")
        terms.append((count, faces))
    return terms


class DiceRoller:
    """Default dice service drawing uniform faces from ``random``."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """
        Initialize dice roller.

        Args:
            rng: Optional random source, e.g. a seeded ``random.Random``
        """
        self._rng = rng or random.Random()

    def roll(self, faces: int, count: int = 1) -> list[int]:
        """Roll ``count`` dice with ``faces`` sides."""
        return [self._rng.randint(1, faces) for _ in range(count)]

    def realize(self, formula: str) -> RealizedPool:
        """
        Realize an attribute/fate pool formula as one roll event.

        Args:
            formula: Formula of the form ``{Nd10, Md6}``

        Returns:
            RealizedPool with both sub-pools in roll order
        """
        terms = parse_pool_formula(formula)
        if [faces for _, faces in terms] != [ATTRIBUTE_DIE_FACES, FATE_DIE_FACES]:
            raise DiceFormulaError(
                f"Expected {{Nd{ATTRIBUTE_DIE_FACES}, Md{FATE_DIE_FACES}}}, got {formula!r}"
            )

        (attribute_count, _), (fate_count, _) = terms
        pool = RealizedPool(
            formula=formula,
            attribute_faces=tuple(self.roll(ATTRIBUTE_DIE_FACES, attribute_count)),
            fate_faces=tuple(self.roll(FATE_DIE_FACES, fate_count)),
        )
        logger.debug(f"Rolled {formula}: {pool.attribute_faces} {pool.fate_faces}")
        return pool
