"""
Post API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.db import INT4_MAX, INT4_MIN


class CreatePostRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    post_content: str = Field(..., alias="postContent", min_length=1)
    fellow_id: int = Field(..., alias="fellowId", ge=INT4_MIN, le=INT4_MAX)
