"""Tax Compare - salary tax outcomes across national tax regimes."""

__version__ = "0.1.0"
