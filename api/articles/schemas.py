"""
Pydantic schemas for article endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class ArticleWrite(BaseModel):
    title: str
    content: str
