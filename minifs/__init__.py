"""An in-memory hierarchical file system with a shell, snapshots and JSON export."""

__version__ = "0.1.0"
__all__ = ["fs", "shell", "tokens"]