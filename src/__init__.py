"""CreditAI: behavioral credit profiles and hybrid similarity search."""

from creditai.version import __version__

__all__ = ["__version__"]
