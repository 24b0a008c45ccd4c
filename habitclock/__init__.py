"""habitclock: multi-clock time-of-week analytics for discrete controls."""

__version__ = "0.1.0"
