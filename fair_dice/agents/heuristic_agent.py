from .base import Agent
from . import register_agent


@register_agent("highest_mean")
class HighestMeanAgent(Agent):
    """
    Picks the die with the highest average face; ties go to the lowest index.
    With non-transitive dice this is not always the best pick against the die the computer gets next.
    """
    def choose_die(self, view):
        dice = view["dice"]
        best = view["low"]
        for i in range(view["low"], view["high"] + 1):
            if dice[i].mean() > dice[best].mean():
                best = i
        return best
