"""Maven repository connector: metadata lookups and reachability checks."""

__version__ = "0.1.0"
