"""
Exception types raised by the morphing engine.

Both concrete errors also derive from ValueError so callers that only guard
against bad input values keep working.
"""


class MorphError(Exception):
    """Base class for engine errors."""


class LayoutConfigError(MorphError, ValueError):
    """Node attributes or node count cannot produce a valid layout."""


class TransitionError(MorphError, ValueError):
    """A transition request violates the orchestrator's contract."""
