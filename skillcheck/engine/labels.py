"""Label lookup for chat card text."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from skillcheck.config import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__.split(".")[-1])

LANG_DIR = Path(__file__).resolve().parent.parent / "lang"


class LabelSource(Protocol):
    """Anything that can translate a dotted label key."""

    def translate(self, key: str) -> str: ...


class LabelLookup:
    """Resolves dotted keys such as ``CheckResult.SolidSuccess`` from a string table."""

    def __init__(
        self, table: Optional[dict[str, Any]] = None, language: str = DEFAULT_LANGUAGE
    ) -> None:
        """
        Initialize label lookup.

        Args:
            table: Nested string table; loaded from ``lang/<language>.json`` if omitted
            language: Language file to load when no table is given
        """
        self._table = table if table is not None else self.load_table(language)

    @staticmethod
    def load_table(language: str) -> dict[str, Any]:
        """Load the string table for ``language``."""
        path = LANG_DIR / f"{language}.json"
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def translate(self, key: str) -> str:
        """
        Translate a dotted key.

        Unknown keys come back unchanged so every key has a label.
        """
        node: Any = self._table
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                logger.debug(f"No label for {key}")
                return key
            node = node[part]
        return node if isinstance(node, str) else key
