"""Persisted check record model."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from skillcheck.models.check import RealizedPool


class RollMode(str, Enum):
    """Host roll privacy mode."""

    PUBLIC = "publicroll"
    GM = "gmroll"
    BLIND = "blindroll"
    SELF = "selfroll"

    @property
    def is_private(self) -> bool:
        """Whether the record is restricted to the GM recipient set."""
        return self in (RollMode.GM, RollMode.BLIND)


class CheckRecord(BaseModel):
    """A rendered, editable skill check as stored by the host."""

    record_id: str = Field(description="Opaque record identifier")
    content: str = Field(default="", description="Rendered chat card")
    flags: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Metadata by namespace, then key"
    )
    roll: Optional[RealizedPool] = Field(default=None, description="Realized dice, if attached")

    # Delivery
    user_id: Optional[str] = Field(default=None, description="User that made the check")
    speaker: Optional[str] = Field(default=None, description="Speaker alias shown on the card")
    roll_mode: RollMode = Field(default=RollMode.PUBLIC, description="Roll mode at creation")
    whisper: list[str] = Field(default_factory=list, description="Recipients; empty means public")

    created_at: datetime = Field(default_factory=datetime.now, description="Creation time")
    updated_at: Optional[datetime] = Field(default=None, description="Last revision time")

    def get_flag(self, scope: str, key: str) -> Optional[Any]:
        """Return flag ``scope.key`` or None when unset."""
        return self.flags.get(scope, {}).get(key)
