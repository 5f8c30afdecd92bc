"""FastAPI REST API for stone cutting jobs.

This module provides a REST API for placing partitions, calculating
remainders, allocating layer strips and planning whole cutting jobs.

Usage:
    uvicorn stonecut.web:app --reload
"""

from stonecut.web.app import app, create_app

__all__ = ["app", "create_app"]
