"""Standard logging tags for consistent log filtering.

Usage:
    from core.logging.tags import TAG_ANIM
    logger.debug("%s Animation started: %s", TAG_ANIM, name)
"""

TAG_PERF = "[PERF]"
"""Performance metrics (tick delivery timing)."""

TAG_ANIM = "[ANIM]"
"""Property animator lifecycle."""

TAG_QUEUE = "[QUEUE]"
"""Serial animation queue."""

TAG_EVENTS = "[EVENTS]"
"""Entity event hub fan-out."""

TAG_TICK = "[TICK]"
"""High-frequency per-tick traces (verbose only)."""
