import pytest

from cbc_portal.data import DEMO_USER_ID
from cbc_portal.schemas.article import ArticleInput, ArticleUpdate
from cbc_portal.schemas.common import ListCriteria
from cbc_portal.services.articles import (
    ARTICLE_FIELDS_REQUIRED_MESSAGE,
    ARTICLE_NOT_FOUND_MESSAGE,
    DUPLICATE_SLUG_MESSAGE,
    NOT_AUTHENTICATED_MESSAGE,
    ArticleDetail,
    ArticleFeed,
    AuthorArticles,
    generate_slug,
)


@pytest.mark.parametrize(
    ("title", "slug"),
    [
        ("Getting Started with Claude API", "getting-started-with-claude-api"),
        ("  AI & Rwanda: 2026!  ", "ai-rwanda-2026"),
        ("???", ""),
    ],
)
def test_generate_slug(title: str, slug: str) -> None:
    assert generate_slug(title) == slug


@pytest.mark.asyncio
async def test_feed_lists_published_articles_with_authors(source) -> None:
    page = await ArticleFeed(source).load()

    assert [a.id for a in page.items] == ["1", "2", "3", "4"]
    assert page.items[0].author.full_name == "Kaio Mugisha"


@pytest.mark.asyncio
async def test_feed_category_and_search(source) -> None:
    feed = ArticleFeed(source)

    tutorials = await feed.load(ListCriteria(filters={"category": "tutorial"}))
    searched = await feed.load(ListCriteria(search="HACKATHON"))

    assert [a.id for a in tutorials.items] == ["1", "4"]
    assert [a.id for a in searched.items] == ["3"]


@pytest.mark.asyncio
async def test_unknown_slug_is_not_found(source) -> None:
    detail = ArticleDetail(source)

    result = await detail.get_by_slug("does-not-exist")

    assert result.entity is None
    assert result.not_found
    assert detail.error == ARTICLE_NOT_FOUND_MESSAGE


@pytest.mark.asyncio
async def test_drafts_are_not_public(source) -> None:
    result = await ArticleDetail(source).get_by_slug("draft-demo-day-recap")

    assert result.not_found


@pytest.mark.asyncio
async def test_published_article_by_slug(source) -> None:
    result = await ArticleDetail(source).get_by_slug("getting-started-with-claude-api")

    assert result.entity.title == "Getting Started with Claude API"
    assert result.entity.author.id == "1"


@pytest.mark.asyncio
async def test_author_sees_drafts(source) -> None:
    page = await AuthorArticles(source).load_for(DEMO_USER_ID)

    assert [(a.id, a.published) for a in page.items] == [("5", False)]


@pytest.mark.asyncio
async def test_create_derives_slug_and_lists_immediately(source) -> None:
    store = AuthorArticles(source)
    await store.load_for(DEMO_USER_ID)

    result = await store.create(
        DEMO_USER_ID, ArticleInput(title="Hello, World!", content="Body", category="news")
    )

    assert result.entity.slug == "hello-world"
    assert [a.id for a in store.data][0] == result.entity.id
    assert store.total_count == 2


@pytest.mark.asyncio
async def test_create_rejects_duplicate_titles(source) -> None:
    result = await AuthorArticles(source).create(
        DEMO_USER_ID, ArticleInput(title="Getting Started with Claude API", content="Again")
    )

    assert result.error == DUPLICATE_SLUG_MESSAGE


@pytest.mark.asyncio
async def test_create_validation(source) -> None:
    store = AuthorArticles(source)

    assert (await store.create(None, ArticleInput(title="T", content="C"))).error == NOT_AUTHENTICATED_MESSAGE
    assert (await store.create(DEMO_USER_ID, ArticleInput(title="T"))).error == ARTICLE_FIELDS_REQUIRED_MESSAGE


@pytest.mark.asyncio
async def test_update_keeps_slug_and_touches_timestamp(source, clock) -> None:
    store = AuthorArticles(source, clock=clock)
    await store.load_for(DEMO_USER_ID)

    result = await store.update(DEMO_USER_ID, "5", ArticleUpdate(title="Demo Day Recap", published=True))

    assert result.entity.slug == "draft-demo-day-recap"
    assert result.entity.updated_at == clock()
    assert store.data[0].title == "Demo Day Recap"


@pytest.mark.asyncio
async def test_authors_cannot_touch_other_articles(source) -> None:
    store = AuthorArticles(source)

    updated = await store.update(DEMO_USER_ID, "1", ArticleUpdate(title="Mine now"))
    deleted = await store.delete(DEMO_USER_ID, "1")

    assert updated.error == ARTICLE_NOT_FOUND_MESSAGE
    assert deleted.error == ARTICLE_NOT_FOUND_MESSAGE


@pytest.mark.asyncio
async def test_delete_own_article(source) -> None:
    store = AuthorArticles(source)
    await store.load_for(DEMO_USER_ID)

    result = await store.delete(DEMO_USER_ID, "5")

    assert result.success
    assert store.data == []
    assert store.total_count == 0
