"""
Fellow dependencies for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database
from core.dependencies import get_db

from .repository import FellowRepository


def get_fellow_repository(db: Database = Depends(get_db)) -> FellowRepository:
    return FellowRepository(db)
