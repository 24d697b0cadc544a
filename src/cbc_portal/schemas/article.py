"""Blog article schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from .member import AuthorSummary

ArticleCategory = Literal["tutorial", "project", "news", "event", "general"]


class Article(BaseModel):
    """A markdown blog article written by a member."""

    id: str
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    category: ArticleCategory = "general"
    cover_image_url: str | None = None
    published: bool = False
    author_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(extra="ignore")


class ArticleWithAuthor(Article):
    """Article with its author's public details embedded."""

    author: AuthorSummary | None = None


class ArticleInput(BaseModel):
    """Fields an author supplies when writing an article."""

    title: str = ""
    content: str = ""
    excerpt: str | None = None
    category: ArticleCategory = "general"
    cover_image_url: str | None = None
    published: bool = False


class ArticleUpdate(BaseModel):
    """Partial article edit. The slug is never regenerated."""

    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    category: ArticleCategory | None = None
    cover_image_url: str | None = None
    published: bool | None = None
