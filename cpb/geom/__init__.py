"""Geometry helpers.

This package is intentionally small and dependency-free (no Qt): the arc math
must stay unit-testable without a display.
"""

from __future__ import annotations
