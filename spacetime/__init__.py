"""
Spacetime - Economic Simulation Engine

A deterministic, turn-based economy for a space strategy game. Each turn
folds a snapshot through fixed phases and provides:
- Colony production, consumption and growth
- Science progression with discoveries, schematics and patents
- Autonomous corporate investment and acquisition
- An ordered event log for the player
"""

__version__ = "0.1.0"
