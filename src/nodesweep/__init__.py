"""nodesweep - find and safely trash node_modules folders."""

__version__ = "0.1.0"
