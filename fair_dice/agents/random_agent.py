import random

from .base import Agent
from . import register_agent


@register_agent("random")
class RandomAgent(Agent):
    """
    Picks any die uniformly at random.
    """
    def __init__(self, rng=None):
        """
        Args:
            rng: Optional random number generator; a private unseeded one is used when omitted.
        """
        super().__init__(rng or random.Random())

    def choose_die(self, view):
        return self.rng.randint(view["low"], view["high"])


@register_agent("first")
class FirstDieAgent(Agent):
    """Always takes the lowest index, as a naive user would."""
    def choose_die(self, view):
        return view["low"]
