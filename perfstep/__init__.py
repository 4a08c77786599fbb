"""perfstep — performance-test build step (Taurus bootstrap + run)."""

__version__ = "0.1.0"
