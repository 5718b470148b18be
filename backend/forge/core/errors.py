"""Domain errors raised by the compliance and load engine.

Routes translate these into HTTP responses; the engine itself never
builds HTTP errors.
"""


class ForgeError(Exception):
    """Base class for engine errors."""


class NotFound(ForgeError):
    """No plan exists, or the requested session is not in the tracked week."""


class InvalidPlanShape(ForgeError):
    """The plan's tracked week is missing or does not have 7 day entries."""


class CollaboratorUnavailable(ForgeError):
    """The advisory text generator did not answer or returned garbage."""
