"""
mtgsim - Turn and Zone Engine for a Commander Table

A small, deterministic engine for two (or more) seats playing from
externally resolved decklists. It provides:
- Deck construction, seeded shuffling and drawing
- The turn/phase/step state machine
- Snapshots with hidden-hand rules
- A game registry and an HTTP API
"""

__version__ = "0.1.0"
