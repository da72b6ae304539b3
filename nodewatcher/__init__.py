"""Node health crawler for mesh-network nodes."""

__version__ = "0.0.1"
