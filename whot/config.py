"""
Rule and environment configuration.
"""

import os

from pydantic import BaseModel, Field, field_validator


# Environment configuration
WHOT_ENV = os.getenv("WHOT_ENV", "development")
WHOT_LEDGER_URL = os.getenv("WHOT_LEDGER_URL", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "info").upper()


class RuleConfig(BaseModel):
    """Configuration for a Whot match."""

    hand_size: int = Field(
        default=5,
        ge=1,
        le=10,
        description="Cards dealt to each player at the start"
    )
    human_name: str = Field(
        default="You",
        min_length=1,
        max_length=40,
        description="Display name for the human player"
    )
    computer_name: str = Field(
        default="Computer",
        min_length=1,
        max_length=40,
        description="Display name for the computer player"
    )
    bot_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Pause before each computer move, for display only"
    )
    max_bot_steps: int = Field(
        default=50,
        ge=1,
        description="Most commands the computer may issue in one hand-off"
    )

    @field_validator('human_name', 'computer_name')
    @classmethod
    def strip_name(cls, v):
        """Names are shown as-is, so reject blank ones."""
        v = v.strip()
        if not v:
            raise ValueError('player name must not be blank')
        return v


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
