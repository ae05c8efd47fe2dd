"""Terminal client and HTTP clients for a messenger API gateway."""

__version__ = "0.1.0"