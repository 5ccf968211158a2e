"""Geographic core for the Web3 professional network dashboard."""

__version__ = "0.1.0"
