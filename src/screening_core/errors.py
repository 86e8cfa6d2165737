"""Exception taxonomy for the screening SDK.

Only :class:`ReportValidationError` ever reaches an API caller.
:class:`UpstreamServiceError` is raised by live completion backends and is
always absorbed by :class:`~screening_core.gateway.LLMGateway`, which swaps
in deterministic fallback content.  Malformed model output is not an error
at all: the parsers return empty or partial results instead.
"""


class ScreeningError(Exception):
    """Base class for all SDK errors."""


class ReportValidationError(ScreeningError, ValueError):
    """Missing or malformed patient info or test payload."""


class UpstreamServiceError(ScreeningError):
    """The external completion service failed (auth, quota, network, timeout)."""
