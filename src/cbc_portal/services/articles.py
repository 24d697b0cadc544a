"""Blog feed, article pages and author-side article management."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from cbc_portal.schemas.article import Article, ArticleInput, ArticleUpdate, ArticleWithAuthor
from cbc_portal.schemas.common import DetailResult, ListCriteria, MutationResult, Page
from cbc_portal.schemas.member import AuthorSummary
from cbc_portal.services.backend import DataSource
from cbc_portal.services.query import TableQuery
from cbc_portal.services.store import EntityStore, fetch_rows
from cbc_portal.services.table_client import TableError
from cbc_portal.utils.text import blank_to_none

logger = logging.getLogger(__name__)

ARTICLES_LOAD_FAILED_MESSAGE = "Failed to load articles"
ARTICLE_NOT_FOUND_MESSAGE = "Article not found"
ARTICLE_LOAD_FAILED_MESSAGE = "Failed to load article"
NOT_AUTHENTICATED_MESSAGE = "Not authenticated"
ARTICLE_FIELDS_REQUIRED_MESSAGE = "Title and content are required"
DUPLICATE_SLUG_MESSAGE = "An article with this title already exists"
CREATE_FAILED_MESSAGE = "Failed to create article"
UPDATE_FAILED_MESSAGE = "Failed to update article"
DELETE_FAILED_MESSAGE = "Failed to delete article"

ARTICLE_SEARCH_COLUMNS = ("title", "excerpt", "content")

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """Derive the URL slug of an article from its title.

    >>> generate_slug("Getting Started with Claude API!")
    'getting-started-with-claude-api'
    """
    return _SLUG_SEPARATORS.sub("-", title.lower()).strip("-")


async def attach_authors(
    source: DataSource, articles: Sequence[Article]
) -> list[ArticleWithAuthor]:
    """Embed each article's author summary."""
    author_ids = sorted({article.author_id for article in articles})
    authors: dict[str, AuthorSummary] = {}
    if author_ids:
        rows = await fetch_rows(source, TableQuery("members").in_("id", author_ids))
        authors = {row["id"]: AuthorSummary.model_validate(row) for row in rows.rows}
    return [
        ArticleWithAuthor(
            **article.model_dump(exclude={"author"}), author=authors.get(article.author_id)
        )
        for article in articles
    ]


class ArticleFeed(EntityStore[ArticleWithAuthor]):
    """Published articles, newest first."""

    table = "articles"
    model = ArticleWithAuthor
    load_error_message = ARTICLES_LOAD_FAILED_MESSAGE

    async def _with_authors(self, items: list[ArticleWithAuthor]) -> list[ArticleWithAuthor]:
        return await attach_authors(self.source, items)

    async def load(self, criteria: ListCriteria | None = None) -> Page[ArticleWithAuthor]:
        criteria = criteria or ListCriteria(page_size=self.page_size)
        query = self.filtered(self.query().eq("published", True), criteria)
        query = query.matching(criteria.search, *ARTICLE_SEARCH_COLUMNS)
        query = query.order_by("created_at", descending=True)
        return await self.load_query(query, criteria, enrich=self._with_authors)


class ArticleDetail:
    """Published article lookup by slug."""

    def __init__(self, source: DataSource) -> None:
        self.source = source
        self.article: ArticleWithAuthor | None = None
        self.error: str | None = None

    async def get_by_slug(self, slug: str) -> DetailResult[ArticleWithAuthor]:
        query = TableQuery("articles").eq("slug", slug).eq("published", True).one()
        try:
            result = await fetch_rows(self.source, query)
            [self.article] = await attach_authors(
                self.source, [Article.model_validate(result.rows[0])]
            )
        except TableError as exc:
            self.article = None
            if exc.is_not_found:
                self.error = ARTICLE_NOT_FOUND_MESSAGE
                return DetailResult(not_found=True, error=self.error)
            logger.error("Error fetching article %s: %s", slug, exc, exc_info=True)
            self.error = ARTICLE_LOAD_FAILED_MESSAGE
            return DetailResult(error=self.error)

        self.error = None
        return DetailResult(entity=self.article)


class AuthorArticles(EntityStore[Article]):
    """An author's own articles, drafts included."""

    table = "articles"
    model = Article

    author_id: str | None = None

    async def load_for(self, author_id: str) -> Page[Article]:
        self.author_id = author_id
        query = self.query().eq("author_id", author_id).order_by("created_at", descending=True)
        return await self.load_query(query, ListCriteria())

    async def refetch(self) -> Page[Article]:
        if self.author_id is None:
            return self.current_page()
        return await self.load_for(self.author_id)

    def _owned(self, author_id: str, article_id: str) -> TableQuery:
        return self.query().eq("id", article_id).eq("author_id", author_id)

    async def create(self, author_id: str | None, payload: ArticleInput) -> MutationResult[Article]:
        """Write a new article; its slug is derived from the title once."""
        if not author_id:
            return MutationResult.fail(NOT_AUTHENTICATED_MESSAGE)
        title = payload.title.strip()
        slug = generate_slug(title)
        if not slug or not payload.content.strip():
            return MutationResult.fail(ARTICLE_FIELDS_REQUIRED_MESSAGE)

        row = {
            "title": title,
            "slug": slug,
            "content": payload.content,
            "excerpt": blank_to_none(payload.excerpt),
            "category": payload.category,
            "cover_image_url": blank_to_none(payload.cover_image_url),
            "published": payload.published,
            "author_id": author_id,
        }
        try:
            stored = await self.source.backend.insert(self.table, row)
        except TableError as exc:
            if exc.is_conflict:
                return MutationResult.fail(DUPLICATE_SLUG_MESSAGE)
            return self.fail(CREATE_FAILED_MESSAGE, exc)

        article = Article.model_validate(stored)
        self.cache.insert(article)
        self.total_count += 1
        return MutationResult.ok(article)

    async def update(
        self, author_id: str | None, article_id: str, changes: ArticleUpdate
    ) -> MutationResult[Article]:
        """Edit an article; the slug stays as it was created."""
        if not author_id:
            return MutationResult.fail(NOT_AUTHENTICATED_MESSAGE)
        patch = changes.model_dump(exclude_unset=True)
        if "title" in patch and not (patch["title"] or "").strip():
            return MutationResult.fail(ARTICLE_FIELDS_REQUIRED_MESSAGE)
        if "content" in patch and not (patch["content"] or "").strip():
            return MutationResult.fail(ARTICLE_FIELDS_REQUIRED_MESSAGE)
        patch["updated_at"] = self.clock()

        try:
            rows = await self.source.backend.update(
                self.table, patch, self._owned(author_id, article_id).filters
            )
        except TableError as exc:
            return self.fail(UPDATE_FAILED_MESSAGE, exc)
        if not rows:
            return MutationResult.fail(ARTICLE_NOT_FOUND_MESSAGE)

        article = Article.model_validate(rows[0])
        self.cache.patch(article_id, article.model_dump())
        return MutationResult.ok(article)

    async def delete(self, author_id: str | None, article_id: str) -> MutationResult[Article]:
        if not author_id:
            return MutationResult.fail(NOT_AUTHENTICATED_MESSAGE)
        try:
            rows = await self.source.backend.delete(
                self.table, self._owned(author_id, article_id).filters
            )
        except TableError as exc:
            return self.fail(DELETE_FAILED_MESSAGE, exc)
        if not rows:
            return MutationResult.fail(ARTICLE_NOT_FOUND_MESSAGE)

        if self.cache.remove(article_id) is not None:
            self.total_count = max(0, self.total_count - 1)
        return MutationResult.ok(Article.model_validate(rows[0]))
