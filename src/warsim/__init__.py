"""Card game War: deterministic turn resolution and simulation."""

__version__ = "0.1.0"
