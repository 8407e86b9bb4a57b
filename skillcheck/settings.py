"""Runtime settings for check creation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from skillcheck.config import DEFAULT_GM_RECIPIENTS, DEFAULT_ROLL_MODE, DEFAULT_TEMPLATE_ID
from skillcheck.models.record import RollMode


class CheckSettings(BaseModel):
    """Skill check settings."""

    model_config = ConfigDict(extra="forbid")

    roll_mode: RollMode = Field(
        default=RollMode(DEFAULT_ROLL_MODE), description="Host roll privacy mode"
    )
    gm_recipients: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GM_RECIPIENTS),
        description="Recipients of private and blind checks",
    )
    template_id: str = Field(default=DEFAULT_TEMPLATE_ID, description="Chat card template")

    def whisper_recipients(self) -> list[str]:
        """Recipients for a new record; empty unless the roll mode is private."""
        if self.roll_mode.is_private:
            return list(self.gm_recipients)
        return []


class CheckSettingsManager:
    """Manages check settings."""

    def __init__(self, initial_config: Optional[CheckSettings] = None) -> None:
        """Initialize with optional config."""
        self._config = initial_config or CheckSettings()

    @property
    def config(self) -> CheckSettings:
        """Get current config."""
        return self._config

    def update_config(self, new_config: CheckSettings) -> None:
        """Update configuration."""
        self._config = new_config
