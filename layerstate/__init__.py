"""Per-layer file tracking, whiteout selection and timing for filesystem snapshots."""

__version__ = "0.1.0"
__all__ = ["layered_map", "timing", "whiteouts"]