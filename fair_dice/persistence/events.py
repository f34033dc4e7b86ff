
"""
events.py
Defines the GameEvent dataclass for event-sourced recording of protocol disclosures.
Used by recorder.py, the CLI and the experiment script to keep every digest, roll and key a game disclosed.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class GameEvent:
    """
    Represents a single disclosure in the game (e.g., first move committed, keys revealed).
    Fields:
        game_id (str): Unique game identifier.
        event_type (str): Type of event (e.g., 'RollsCommitted').
        payload (dict): Event-specific data.
        phase (str|None): Engine phase right after the event.
    """
    game_id: str
    event_type: str
    payload: Dict[str, Any]
    phase: Optional[str] = None


def from_engine_event(game_id: str, event: Dict[str, Any], phase: Optional[str] = None) -> GameEvent:
    """Wrap a raw engine event dict (which carries its own 'type')."""
    payload = {k: v for k, v in event.items() if k != "type"}
    return GameEvent(game_id=game_id, event_type=event.get("type", "Unknown"), payload=payload, phase=phase)
