"""JSON Pointer, JSON Patch, JSON Merge Patch and structural comparison for plain Python data."""

__version__ = "1.0.0"
__all__ = ["compare", "merge", "patch", "pointer"]