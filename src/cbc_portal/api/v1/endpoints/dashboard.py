# src/cbc_portal/api/v1/endpoints/dashboard.py
"""Member dashboard: own events, projects, articles and profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from cbc_portal.api.v1.dependencies import (
    ApprovedDep,
    AuthenticatedDep,
    PortalDep,
    provide,
    raise_for_result,
)
from cbc_portal.schemas.article import Article, ArticleInput, ArticleUpdate
from cbc_portal.schemas.common import DashboardStats, Page
from cbc_portal.schemas.event import Event, EventRSVP, MemberEventRSVP, Timeframe
from cbc_portal.schemas.member import Member, ProfileUpdate
from cbc_portal.schemas.project import Project, ProjectInput
from cbc_portal.services import articles as articles_service
from cbc_portal.services import events as events_service
from cbc_portal.services import projects as projects_service
from cbc_portal.services.articles import AuthorArticles
from cbc_portal.services.dashboard import MemberDashboard
from cbc_portal.services.events import MemberEvents, RSVPService
from cbc_portal.services.members import MEMBER_NOT_FOUND_MESSAGE
from cbc_portal.services.projects import MemberProjects

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class DashboardOverview(BaseModel):
    stats: DashboardStats
    upcoming_events: list[Event]
    projects: list[Project]


@router.get("/overview", response_model=DashboardOverview)
async def get_overview(
    identity: AuthenticatedDep,
    dashboard: Annotated[MemberDashboard, Depends(provide(MemberDashboard))],
) -> DashboardOverview:
    if identity.member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MEMBER_NOT_FOUND_MESSAGE)
    stats = await dashboard.load_for(identity.member)
    if dashboard.error and not dashboard.data and not dashboard.projects:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=dashboard.error)
    return DashboardOverview(stats=stats, upcoming_events=dashboard.data, projects=dashboard.projects)


@router.get("/events", response_model=Page[MemberEventRSVP])
async def my_events(
    identity: AuthenticatedDep,
    store: Annotated[MemberEvents, Depends(provide(MemberEvents))],
    timeframe: Timeframe = "upcoming",
) -> Page[MemberEventRSVP]:
    return await store.load_for(identity.user.id, timeframe)


@router.post(
    "/events/{event_id}/rsvp",
    response_model=EventRSVP,
    status_code=status.HTTP_201_CREATED,
)
async def rsvp(event_id: str, identity: ApprovedDep, portal: PortalDep) -> EventRSVP:
    """Register the signed-in member for an event."""
    result = await RSVPService(portal.source).rsvp(event_id, identity.user.id)
    raise_for_result(
        result,
        not_found=(events_service.EVENT_NOT_FOUND_MESSAGE,),
        conflict=(events_service.ALREADY_REGISTERED_MESSAGE, events_service.EVENT_FULL_MESSAGE),
    )
    return result.entity


@router.delete("/events/{event_id}/rsvp", response_model=EventRSVP)
async def cancel_rsvp(event_id: str, identity: AuthenticatedDep, portal: PortalDep) -> EventRSVP:
    result = await RSVPService(portal.source).cancel(event_id, identity.user.id)
    raise_for_result(result, not_found=(events_service.RSVP_NOT_FOUND_MESSAGE,))
    return result.entity


@router.get("/projects", response_model=Page[Project])
async def my_projects(
    identity: AuthenticatedDep,
    store: Annotated[MemberProjects, Depends(provide(MemberProjects))],
) -> Page[Project]:
    return await store.load_for(identity.user.id)


@router.post("/projects", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectInput,
    identity: ApprovedDep,
    store: Annotated[MemberProjects, Depends(provide(MemberProjects))],
) -> Project:
    result = await store.create(identity.user.id, payload)
    raise_for_result(result)
    return result.entity


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    identity: AuthenticatedDep,
    store: Annotated[MemberProjects, Depends(provide(MemberProjects))],
) -> Response:
    result = await store.delete(identity.user.id, project_id)
    raise_for_result(
        result,
        not_found=(projects_service.PROJECT_NOT_FOUND_MESSAGE,),
        forbidden=(projects_service.NOT_OWNER_MESSAGE,),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/articles", response_model=Page[Article])
async def my_articles(
    identity: AuthenticatedDep,
    store: Annotated[AuthorArticles, Depends(provide(AuthorArticles))],
) -> Page[Article]:
    return await store.load_for(identity.user.id)


@router.post("/articles", response_model=Article, status_code=status.HTTP_201_CREATED)
async def create_article(
    payload: ArticleInput,
    identity: ApprovedDep,
    store: Annotated[AuthorArticles, Depends(provide(AuthorArticles))],
) -> Article:
    result = await store.create(identity.user.id, payload)
    raise_for_result(result, conflict=(articles_service.DUPLICATE_SLUG_MESSAGE,))
    return result.entity


@router.patch("/articles/{article_id}", response_model=Article)
async def update_article(
    article_id: str,
    payload: ArticleUpdate,
    identity: AuthenticatedDep,
    store: Annotated[AuthorArticles, Depends(provide(AuthorArticles))],
) -> Article:
    result = await store.update(identity.user.id, article_id, payload)
    raise_for_result(result, not_found=(articles_service.ARTICLE_NOT_FOUND_MESSAGE,))
    return result.entity


@router.delete("/articles/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    identity: AuthenticatedDep,
    store: Annotated[AuthorArticles, Depends(provide(AuthorArticles))],
) -> Response:
    result = await store.delete(identity.user.id, article_id)
    raise_for_result(result, not_found=(articles_service.ARTICLE_NOT_FOUND_MESSAGE,))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/profile", response_model=Member)
async def get_profile(identity: AuthenticatedDep) -> Member:
    member = await identity.refresh_member()
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MEMBER_NOT_FOUND_MESSAGE)
    return member


@router.patch("/profile", response_model=Member)
async def update_profile(payload: ProfileUpdate, identity: AuthenticatedDep) -> Member:
    result = await identity.update_profile(payload)
    raise_for_result(result, not_found=(MEMBER_NOT_FOUND_MESSAGE,))
    return result.entity


@router.delete("/profile", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(identity: AuthenticatedDep) -> Response:
    """Delete the member record with everything that hangs off it, then sign out."""
    result = await identity.delete_account()
    raise_for_result(result, not_found=(MEMBER_NOT_FOUND_MESSAGE,))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
