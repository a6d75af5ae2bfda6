"""Domain errors raised below the HTTP layer.

Routes translate these into ``HTTPException`` responses.
"""


class PodrunError(Exception):
    """Base class for podrun domain errors."""


class ValidationError(PodrunError):
    """Input the user must fix before we can continue (e.g. no mood picked)."""


class RemoteError(PodrunError):
    """The persistence backend rejected or failed a request."""
