"""
Bots module - Computer opponent implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy, FirstLegalPolicy: Baselines
- WhotBot: The computer opponent
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .whot_bot import WhotBot, most_common_shape

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "WhotBot",
    "most_common_shape",
]
