"""Version information for cluster-shell."""

__version__ = "0.3.0"
