"""
swarmcompat - terminal capability detection with text-mode fallback for swarm UIs.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
