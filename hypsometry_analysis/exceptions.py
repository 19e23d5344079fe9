"""
Error classes raised by the hypsometry pipeline.

Data errors subclass ValueError so callers that only care about bad input
can catch them generically. Missing catchment files use the builtin
FileNotFoundError.
"""


class HypsometryError(Exception):
    """Base class for all hypsometry analysis errors."""


class MissingDataError(HypsometryError, ValueError):
    """Extrema row absent (or empty) for a required catchment index."""


class MalformedTableError(HypsometryError, ValueError):
    """Input table lacks required columns or holds invalid values."""


class DegenerateRangeError(HypsometryError, ValueError):
    """Minimum equals maximum elevation, or total area is zero."""


class InsufficientDataError(HypsometryError, ValueError):
    """Too few distinct samples for a unique polynomial fit."""


class PlotWriteError(HypsometryError, OSError):
    """A figure could not be written to disk."""


class MissingResultError(HypsometryError, KeyError):
    """Aggregation requested for a catchment with no recorded result."""

    def __str__(self):
        # KeyError.__str__ would repr() the message
        return str(self.args[0]) if self.args else ''
