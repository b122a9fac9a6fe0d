"""staffrota - rotation-by-rotation station assignment with diagnostics."""

__version__ = "0.1.0"
