from __future__ import annotations


class HexChartError(Exception):
    """Base class for errors raised while building hexbin shot charts."""


class EmptyInputError(HexChartError):
    """No shots were supplied, so the lattice bounds are undefined."""


class DegenerateLatticeError(HexChartError):
    """The bin widths or the shot extent cannot produce any hexagonal bins."""


class ConfigError(HexChartError, ValueError):
    """Chart configuration values are inconsistent (e.g. inverted bounds)."""


class InvalidEventError(HexChartError, ValueError):
    """A shot or baseline row does not match the expected schema."""
