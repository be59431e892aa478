"""
Fellow API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FellowNameRequest(BaseModel):
    """
    Body for both create and rename: `{"fellowName": "Maya"}`.
    """

    model_config = ConfigDict(populate_by_name=True)

    fellow_name: str = Field(..., alias="fellowName", min_length=1)
