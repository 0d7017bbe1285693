"""cogo - create, list and destroy cloud servers through a step-by-step wizard."""

__version__ = "0.1.0"
