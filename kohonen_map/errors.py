"""Exceptions raised by the kohonen_map package."""


class SOMError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SOMError, ValueError):
    """Invalid construction or training arguments (dimensions, radius, epochs)."""


class FormatError(ConfigurationError):
    """An output dimension string that is not of the form 'WxH'."""


class DimensionMismatch(SOMError, ValueError):
    """A vector whose length differs from the input dimension of the map."""


class GridIndexError(SOMError, IndexError):
    """A grid coordinate outside [0, X) x [0, Y)."""


class NotInitializedError(SOMError, RuntimeError):
    """The grid was used before `initialize` filled it."""
