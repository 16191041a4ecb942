"""metro-space: make room for station and line signatures in octilinear metro maps."""

__version__ = "0.1.0"
