"""
Whot - Card Game Rules Engine

A deterministic rules engine for Whot, the shape/number matching card game,
played by one human against a scripted opponent.
The engine provides:
- Deck construction, dealing and reshuffling
- Play legality checks with user-facing rejection reasons
- A reducer applying commands and special card effects
- An opponent policy for the computer player
"""

__version__ = "0.1.0"
