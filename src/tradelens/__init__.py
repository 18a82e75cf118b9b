"""
TradeLens - Trading Journal Analytics

Public API for turning journal trade records into dashboard performance reports.
"""

from importlib.metadata import version

try:
    __version__ = version("tradelens")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
