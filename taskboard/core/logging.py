import sys
import os
from datetime import datetime
from typing import Any, Optional


# ═══════════════════════════════════════════════════════════════════════════════
# LOG FILTERING
# ═══════════════════════════════════════════════════════════════════════════════
# Only these scopes are shown at INFO level
# Everything else is gated behind DEBUG

INFO_SCOPES = {
    "TASKS",    # Repository reads and writes
    "STORE",    # Document store backend
    "AUTH",     # Session provider / identity resolution
    "DB",       # MongoDB connection lifecycle
    "API",      # Request-level failures
    "EDITOR",   # Task editor submissions
}

# DEBUG-only scopes (hidden by default)
DEBUG_SCOPES = {
    "FILTER",
    "GATE",
    "MONITORING",
}


def _debug_enabled() -> bool:
    return os.getenv("TASKBOARD_DEBUG", "false").lower() == "true"


def log(scope: str, message: str, data: Any = None, user_id: Optional[str] = None) -> None:
    """
    Unified logging function for Taskboard.

    Only INFO_SCOPES are shown by default.
    Set TASKBOARD_DEBUG=true to see all scopes.
    """
    if scope not in INFO_SCOPES and not _debug_enabled():
        return

    timestamp = datetime.now().strftime("%H:%M:%S")
    prefix = f"[{timestamp}] [{scope}]"

    if user_id:
        prefix += f" [{user_id[:12]}]"

    print(f"{prefix} {message}")

    if data:
        print(f"  Data: {data}")

    sys.stdout.flush()


def log_section(scope: str, title: str) -> None:
    """
    Log a section header with visual separator.
    """
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"\n{'='*60}")
    print(f"[{timestamp}] [{scope}] {title}")
    print(f"{'='*60}")
    sys.stdout.flush()
