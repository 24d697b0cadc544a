# src/cbc_portal/api/v1/endpoints/public.py
"""Public pages: events, projects, blog, newsletter, membership and language."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from cbc_portal.api.v1.dependencies import CriteriaDep, PortalDep, provide, raise_for_result
from cbc_portal.schemas.article import ArticleCategory, ArticleWithAuthor
from cbc_portal.schemas.auth import LocaleChange, LocaleResponse
from cbc_portal.schemas.common import DetailResult, MutationResult, Page
from cbc_portal.schemas.event import Event, EventType, Timeframe
from cbc_portal.schemas.member import Member, MemberApplicationInput
from cbc_portal.schemas.project import ProjectWithTeam
from cbc_portal.schemas.subscriber import SubscribeRequest
from cbc_portal.services.articles import ArticleDetail, ArticleFeed
from cbc_portal.services.events import EventCatalog, EventDetail
from cbc_portal.services.locale import UnsupportedLocaleError
from cbc_portal.services.members import DUPLICATE_APPLICATION_MESSAGE, MembershipApplications
from cbc_portal.services.projects import ProjectDetail, ProjectShowcase
from cbc_portal.services.subscribers import NewsletterSubscriptions

router = APIRouter(tags=["public"])


def _entity_or_error(result: DetailResult[Any]) -> Any:
    if result.entity is not None:
        return result.entity
    if result.not_found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.error)
    raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.error)


@router.get("/events", response_model=Page[Event])
async def list_events(
    criteria: CriteriaDep,
    catalog: Annotated[EventCatalog, Depends(provide(EventCatalog))],
    timeframe: Timeframe = "upcoming",
    event_type: EventType | None = None,
) -> Page[Event]:
    """List published events; upcoming soonest first, past most recent first."""
    criteria.filters["event_type"] = event_type
    return await catalog.load(criteria, timeframe=timeframe)


@router.get("/events/{event_id}", response_model=Event)
async def get_event(event_id: str, portal: PortalDep) -> Event:
    return _entity_or_error(await EventDetail(portal.source).get(event_id))


@router.get("/projects", response_model=Page[ProjectWithTeam])
async def list_projects(
    criteria: CriteriaDep,
    showcase: Annotated[ProjectShowcase, Depends(provide(ProjectShowcase))],
    category: str | None = None,
) -> Page[ProjectWithTeam]:
    """Showcase projects, featured first; category ``All`` means no filter."""
    criteria.filters["category"] = category
    return await showcase.load(criteria)


@router.get("/projects/{project_id}", response_model=ProjectWithTeam)
async def get_project(project_id: str, portal: PortalDep) -> ProjectWithTeam:
    return _entity_or_error(await ProjectDetail(portal.source).get(project_id))


@router.get("/articles", response_model=Page[ArticleWithAuthor])
async def list_articles(
    criteria: CriteriaDep,
    feed: Annotated[ArticleFeed, Depends(provide(ArticleFeed))],
    category: ArticleCategory | None = None,
) -> Page[ArticleWithAuthor]:
    criteria.filters["category"] = category
    return await feed.load(criteria)


@router.get("/articles/{slug}", response_model=ArticleWithAuthor)
async def get_article(slug: str, portal: PortalDep) -> ArticleWithAuthor:
    return _entity_or_error(await ArticleDetail(portal.source).get_by_slug(slug))


@router.post("/subscribe", response_model=MutationResult)
async def subscribe(
    payload: SubscribeRequest,
    subscriptions: Annotated[NewsletterSubscriptions, Depends(provide(NewsletterSubscriptions))],
) -> MutationResult:
    """Subscribe to club news; repeating a subscription also succeeds."""
    result = await subscriptions.subscribe(payload.email)
    raise_for_result(result)
    return MutationResult(success=True)


@router.post("/join", response_model=Member, status_code=status.HTTP_201_CREATED)
async def join(
    payload: MemberApplicationInput,
    applications: Annotated[MembershipApplications, Depends(provide(MembershipApplications))],
) -> Member:
    """Submit a membership application; new members start as ``pending``."""
    result = await applications.submit(payload)
    raise_for_result(result, conflict=(DUPLICATE_APPLICATION_MESSAGE,))
    return result.entity


@router.get("/locale", response_model=LocaleResponse)
async def get_locale(portal: PortalDep) -> LocaleResponse:
    return LocaleResponse(locale=portal.locale.current)


@router.put("/locale", response_model=LocaleResponse)
async def set_locale(payload: LocaleChange, portal: PortalDep) -> LocaleResponse:
    try:
        locale = portal.locale.set(payload.locale)
    except UnsupportedLocaleError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return LocaleResponse(locale=locale)
