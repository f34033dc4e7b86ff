from abc import ABC, abstractmethod
import random
from typing import Any, Callable, Optional


class Agent(ABC):
    """
    Abstract base class for automated die choosers.
    An agent stands in for the user when the user moves first: it receives the engine's public view and returns a die index.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng (random.Random|None): Randomness source for agents that need one.
        """
        self.rng = rng

    @abstractmethod
    def choose_die(self, view: Any) -> int:
        """
        Given the public view, return the index of the die to play with.
        Args:
            view (dict): Engine view with keys 'dice', 'low', 'high' and 'first_mover'.
        Returns:
            int: Die index in [view['low'], view['high']].
        """
        raise NotImplementedError

    def as_chooser(self, engine) -> Callable[[int, int], int]:
        """
        Adapt this agent to the engine's request_die_choice(low, high) collaborator.
        """
        def request_die_choice(low: int, high: int) -> int:
            return self.choose_die(engine.get_view())
        return request_die_choice
