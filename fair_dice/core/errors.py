
"""
errors.py
Defines the exception hierarchy for the fair dice engine.
All errors are raised synchronously at the point of validation and are never retried by the core.
Related modules:
- dice.py: InvalidDieSpec, InsufficientDice, InvalidSelection.
- commitment.py: InvalidInput, CommitmentError.
- engine.py: IllegalPhaseError.
"""


class FairDiceError(Exception):
    """
    Base class for every error raised by the fair dice core.
    """
    pass


class InvalidDieSpec(FairDiceError):
    """
    Raised when a die is not exactly six non-negative integer faces.
    """
    pass


class InsufficientDice(FairDiceError):
    """
    Raised when fewer dice are supplied than the game requires.
    """
    pass


class InvalidSelection(FairDiceError):
    """
    Raised when a die or face index is outside the allowed range.
    """
    pass


class InvalidInput(FairDiceError):
    """
    Raised when a value cannot be committed to (not a finite integer) or a key is too short.
    """
    pass


class CommitmentError(FairDiceError):
    """
    Raised when a commitment is reused, revealed before committing, or committed after reveal.
    """
    pass


class IllegalPhaseError(FairDiceError):
    """
    Raised when an engine step is called out of order or on a finished game.
    """
    pass
