# src/cbc_portal/api/v1/endpoints/admin.py
"""Back-office routes for admins and leads."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel

from cbc_portal.api.v1.dependencies import AdminDep, CriteriaDep, provide, raise_for_result
from cbc_portal.schemas.common import AdminStats, MutationResult, Page
from cbc_portal.schemas.event import Event, EventInput, EventUpdate
from cbc_portal.schemas.member import (
    BulkStatusChange,
    Member,
    MemberRole,
    MemberStatus,
    RoleChange,
    StatusChange,
)
from cbc_portal.schemas.project import FeaturedToggle, Project
from cbc_portal.schemas.subscriber import Subscriber
from cbc_portal.services import admin as admin_service
from cbc_portal.services.admin import (
    AdminEventManager,
    AdminMemberDirectory,
    AdminOverview,
    AdminProjectManager,
)
from cbc_portal.services.events import EVENT_NOT_FOUND_MESSAGE
from cbc_portal.services.subscribers import NewsletterSubscriptions

router = APIRouter(prefix="/admin", tags=["admin"])

MemberDirectoryDep = Annotated[AdminMemberDirectory, Depends(provide(AdminMemberDirectory))]
EventManagerDep = Annotated[AdminEventManager, Depends(provide(AdminEventManager))]
ProjectManagerDep = Annotated[AdminProjectManager, Depends(provide(AdminProjectManager))]


class AdminOverviewResponse(BaseModel):
    stats: AdminStats
    recent_pending: list[Member]
    error: str | None = None


@router.get("/overview", response_model=AdminOverviewResponse)
async def get_overview(
    _admin: AdminDep,
    overview: Annotated[AdminOverview, Depends(provide(AdminOverview))],
) -> AdminOverviewResponse:
    """Counters and the newest pending applications."""
    stats = await overview.load_stats()
    return AdminOverviewResponse(stats=stats, recent_pending=overview.data, error=overview.error)


@router.get("/members", response_model=Page[Member])
async def list_members(
    _admin: AdminDep,
    criteria: CriteriaDep,
    directory: MemberDirectoryDep,
    member_status: Annotated[MemberStatus | None, Query(alias="status")] = None,
    role: MemberRole | None = None,
) -> Page[Member]:
    criteria.filters.update(status=member_status, role=role)
    return await directory.load(criteria)


@router.patch("/members/{member_id}/status", response_model=Member)
async def change_status(
    member_id: str, payload: StatusChange, _admin: AdminDep, directory: MemberDirectoryDep
) -> Member:
    result = await directory.update_status(member_id, payload.status)
    raise_for_result(result, not_found=(admin_service.MEMBER_NOT_FOUND_MESSAGE,))
    return result.entity


@router.patch("/members/{member_id}/role", response_model=Member)
async def change_role(
    member_id: str, payload: RoleChange, _admin: AdminDep, directory: MemberDirectoryDep
) -> Member:
    result = await directory.update_role(member_id, payload.role)
    raise_for_result(result, not_found=(admin_service.MEMBER_NOT_FOUND_MESSAGE,))
    return result.entity


@router.post("/members/bulk-status", response_model=MutationResult[list[Member]])
async def bulk_change_status(
    payload: BulkStatusChange, _admin: AdminDep, directory: MemberDirectoryDep, response: Response
) -> MutationResult[list[Member]]:
    """Set one status on many members; partial failures come back as 207."""
    result = await directory.bulk_update_status(payload.member_ids, payload.status)
    if not result.success and not result.entity:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    if not result.success:
        response.status_code = status.HTTP_207_MULTI_STATUS
    return result


@router.get("/events", response_model=Page[Event])
async def list_events(_admin: AdminDep, criteria: CriteriaDep, manager: EventManagerDep) -> Page[Event]:
    """All events including unpublished drafts, latest date first."""
    return await manager.load(criteria)


@router.post("/events", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(payload: EventInput, _admin: AdminDep, manager: EventManagerDep) -> Event:
    result = await manager.create(payload)
    raise_for_result(result)
    return result.entity


@router.patch("/events/{event_id}", response_model=Event)
async def update_event(
    event_id: str, payload: EventUpdate, _admin: AdminDep, manager: EventManagerDep
) -> Event:
    result = await manager.update(event_id, payload)
    raise_for_result(result, not_found=(EVENT_NOT_FOUND_MESSAGE,))
    return result.entity


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: str, _admin: AdminDep, manager: EventManagerDep) -> Response:
    result = await manager.delete(event_id)
    raise_for_result(result, not_found=(EVENT_NOT_FOUND_MESSAGE,))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/projects", response_model=Page[Project])
async def list_projects(
    _admin: AdminDep, criteria: CriteriaDep, manager: ProjectManagerDep
) -> Page[Project]:
    return await manager.load(criteria)


@router.patch("/projects/{project_id}/featured", response_model=Project)
async def toggle_featured(
    project_id: str, payload: FeaturedToggle, _admin: AdminDep, manager: ProjectManagerDep
) -> Project:
    result = await manager.toggle_featured(project_id, payload.is_featured)
    raise_for_result(result, not_found=(admin_service.PROJECT_NOT_FOUND_MESSAGE,))
    return result.entity


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: str, _admin: AdminDep, manager: ProjectManagerDep) -> Response:
    result = await manager.delete(project_id)
    raise_for_result(result, not_found=(admin_service.PROJECT_NOT_FOUND_MESSAGE,))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/subscribers", response_model=Page[Subscriber])
async def list_subscribers(
    _admin: AdminDep,
    criteria: CriteriaDep,
    subscriptions: Annotated[NewsletterSubscriptions, Depends(provide(NewsletterSubscriptions))],
) -> Page[Subscriber]:
    return await subscriptions.load(criteria)
