import os

_enabled: bool = True


def enable_timing() -> None:
    """Enable elapsed-time logging for all strenc encode calls."""
    global _enabled
    _enabled = True


def disable_timing() -> None:
    """Disable elapsed-time logging for all strenc encode calls."""
    global _enabled
    _enabled = False


def _is_enabled() -> bool:
    """Check if timing logs are enabled (respects env var override)."""
    if os.environ.get("STRENC_DISABLE_TIMING", "").strip() == "1":
        return False
    return _enabled
