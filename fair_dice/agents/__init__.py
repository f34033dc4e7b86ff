"""
Central agent registry and registration decorator for automated die choosers.
Use @register_agent("name") above an Agent subclass to make it available to the experiment scripts,
and make_agent(name, rng) to build one.
Every module in this directory is imported below so the decorators run on package import.
"""

import importlib
import pkgutil

from .base import Agent

AGENT_MAP = {}


def register_agent(name):
    """
    Decorator registering an Agent subclass under a unique name.
    Usage:
        @register_agent("random")
        class RandomAgent(Agent): ...
    Raises:
        TypeError: If the class is not an Agent.
        ValueError: If the name is already taken by another class.
    """
    def decorator(cls):
        if not (isinstance(cls, type) and issubclass(cls, Agent)):
            raise TypeError(f"{cls!r} is not an Agent subclass")
        if AGENT_MAP.get(name, cls) is not cls:
            raise ValueError(f"agent name {name!r} is already registered to {AGENT_MAP[name].__name__}")
        AGENT_MAP[name] = cls
        return cls
    return decorator


def make_agent(name, rng=None) -> Agent:
    """
    Build a registered agent; rng is shared with the caller so seeded runs stay reproducible.
    Raises:
        KeyError: If no agent is registered under name.
    """
    try:
        cls = AGENT_MAP[name]
    except KeyError:
        raise KeyError(f"unknown agent {name!r}, choose from {sorted(AGENT_MAP)}") from None
    return cls(rng=rng)


for _module in pkgutil.iter_modules(__path__):
    if not _module.ispkg and _module.name != "base":
        importlib.import_module(f"{__name__}.{_module.name}")
