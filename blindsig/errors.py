"""
Error taxonomy for the blind signature pipeline.

Every stage raises one of these; none of them is swallowed inside a stage.
run_protocol() is the only place that turns them into a failure result.
"""

from typing import Optional


class BlindSignatureError(Exception):
    """Base class. ``stage`` names the pipeline stage that failed, if known."""

    def __init__(self, message: str = "", stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class RandomSourceUnavailable(BlindSignatureError):
    """The entropy source could not supply the requested bytes."""


class InvalidInput(BlindSignatureError, ValueError):
    """A required scalar or key argument is missing or out of range."""


class NotInvertible(BlindSignatureError, ArithmeticError):
    """A value shares a common factor with the modulus."""


class InvalidKey(BlindSignatureError, ValueError):
    """Key material is malformed or lacks the required private part."""
