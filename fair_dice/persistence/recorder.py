
"""
recorder.py
Implements event recording for fair dice games. Used to store a stream of GameEvent objects for replay or audit.
InMemoryRecorder is used by the CLI, the experiment script and the tests.
Related modules:
- events.py: Defines GameEvent type.
- serializer.py: Used for saving recorded events.
"""

from typing import List, Optional
from .events import GameEvent, from_engine_event


class InMemoryRecorder:
    """
    Records GameEvent objects in memory for later retrieval.
    Methods:
        record(event): Add a new event.
        drain(game_id, engine): Move all pending engine events into the recorder.
        events(): Get all recorded events.
    """
    def __init__(self):
        self._events: List[GameEvent] = []

    def record(self, event: GameEvent) -> None:
        """Add a new event to the recorder."""
        self._events.append(event)

    def drain(self, game_id: str, engine) -> List[GameEvent]:
        """Pop the engine's pending events, record them and return the new GameEvents."""
        new = [from_engine_event(game_id, ev, engine.phase) for ev in engine.pop_events()]
        self._events.extend(new)
        return new

    def events(self, event_type: Optional[str] = None) -> List[GameEvent]:
        """Return recorded events, optionally filtered by type."""
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e.event_type == event_type]

    def clear(self) -> None:
        self._events.clear()
