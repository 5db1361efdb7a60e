"""Create unified-format patches between texts and apply them, with fuzzy matching."""

__version__ = "0.4.2"

__all__ = ["apply", "cleanup", "diff", "myers"]