"""Exceptions raised by the measurement harness."""


class LatencyError(Exception):
    """Base class for harness errors."""


class NoDataError(LatencyError):
    """The timing store holds no samples to aggregate."""


class MalformedEnvelopeError(LatencyError, ValueError):
    """A delivery envelope does not carry a decodable sequence value."""


class UnknownBackendError(LatencyError, KeyError):
    """No adapter is registered for the requested backend."""


class SequenceOutOfRangeError(LatencyError, ValueError):
    """A delivered sequence lies outside ``[0, chain_length]``."""
