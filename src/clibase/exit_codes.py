"""Process exit statuses used by ``execute``."""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed, or help was shown."""

FAILURE: int = 1
"""Parse error, pre-run failure, command failure or abort."""
