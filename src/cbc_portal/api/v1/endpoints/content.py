# src/cbc_portal/api/v1/endpoints/content.py
"""Site content: public readers and the admin content editor."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from cbc_portal.api.v1.dependencies import AdminDep, PortalDep, provide, raise_for_result
from cbc_portal.schemas.common import Page
from cbc_portal.schemas.site_content import (
    Feature,
    FeatureInput,
    FeatureUpdate,
    Milestone,
    MilestoneInput,
    MilestoneUpdate,
    Partner,
    PartnerInput,
    PartnerUpdate,
    SiteContent,
    SiteContentInput,
    SiteStat,
    SiteStatUpdate,
    TeamProfile,
    TeamProfileInput,
    TeamProfileUpdate,
)
from cbc_portal.services.locale import Locale
from cbc_portal.services.site_content import (
    CONTENT_NOT_FOUND_MESSAGE,
    ContentManager,
    ContentStore,
    FeatureList,
    FeatureManager,
    MilestoneManager,
    MilestoneTimeline,
    PartnerList,
    PartnerManager,
    SiteCopy,
    SiteCopyManager,
    SiteStatBoard,
    SiteStatManager,
    TeamDirectory,
    TeamManager,
)

router = APIRouter(prefix="/content", tags=["content"])
admin_router = APIRouter(prefix="/admin/content", tags=["admin"])

LocaleQuery = Annotated[Locale | None, Query(description="Defaults to the stored preference")]


class SiteCopyResponse(BaseModel):
    locale: str
    texts: dict[str, str]


async def _localized(store: ContentStore, locale: str | None, portal: PortalDep) -> Page:
    await store.load_content()
    return store.localized(locale or portal.locale.current)


@router.get("/features", response_model=Page[Feature])
async def list_features(
    portal: PortalDep,
    store: Annotated[FeatureList, Depends(provide(FeatureList))],
    locale: LocaleQuery = None,
) -> Page[Feature]:
    return await _localized(store, locale, portal)


@router.get("/team", response_model=Page[TeamProfile])
async def list_team(
    portal: PortalDep,
    store: Annotated[TeamDirectory, Depends(provide(TeamDirectory))],
    locale: LocaleQuery = None,
) -> Page[TeamProfile]:
    return await _localized(store, locale, portal)


@router.get("/partners", response_model=Page[Partner])
async def list_partners(
    portal: PortalDep,
    store: Annotated[PartnerList, Depends(provide(PartnerList))],
    locale: LocaleQuery = None,
) -> Page[Partner]:
    """Active partners, highest tier first."""
    return await _localized(store, locale, portal)


@router.get("/milestones", response_model=Page[Milestone])
async def list_milestones(
    portal: PortalDep,
    store: Annotated[MilestoneTimeline, Depends(provide(MilestoneTimeline))],
    locale: LocaleQuery = None,
) -> Page[Milestone]:
    """Active milestones, oldest first."""
    return await _localized(store, locale, portal)


@router.get("/stats", response_model=Page[SiteStat])
async def list_stats(
    portal: PortalDep,
    store: Annotated[SiteStatBoard, Depends(provide(SiteStatBoard))],
    locale: LocaleQuery = None,
) -> Page[SiteStat]:
    return await _localized(store, locale, portal)


@router.get("/copy", response_model=SiteCopyResponse)
async def get_copy(
    portal: PortalDep,
    store: Annotated[SiteCopy, Depends(provide(SiteCopy))],
    category: str | None = None,
    locale: LocaleQuery = None,
) -> SiteCopyResponse:
    """Page copy by key; missing translations fall back to English."""
    locale = locale or portal.locale.current
    await store.load_category(category)
    return SiteCopyResponse(locale=locale, texts=store.texts(locale))


def _register_manager_routes(
    path: str,
    manager_cls: type[ContentManager],
    entity: type[BaseModel],
    create_model: type[BaseModel],
    update_model: type[BaseModel],
) -> None:
    """Add list, create, update and delete routes for one content table."""
    ManagerDep = Annotated[manager_cls, Depends(provide(manager_cls))]

    async def list_items(_admin: AdminDep, manager: ManagerDep) -> Page:
        return await manager.load_content()

    async def create_item(payload: create_model, _admin: AdminDep, manager: ManagerDep) -> BaseModel:
        result = await manager.create(payload)
        raise_for_result(result)
        return result.entity

    async def update_item(
        item_id: str, payload: update_model, _admin: AdminDep, manager: ManagerDep
    ) -> BaseModel:
        result = await manager.update(item_id, payload)
        raise_for_result(result, not_found=(manager.not_found_message,))
        return result.entity

    async def delete_item(item_id: str, _admin: AdminDep, manager: ManagerDep) -> Response:
        result = await manager.delete(item_id)
        raise_for_result(result, not_found=(manager.not_found_message,))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    name = path.strip("/").replace("-", "_")
    admin_router.add_api_route(
        path, list_items, methods=["GET"], response_model=Page[entity], name=f"list_{name}"
    )
    admin_router.add_api_route(
        path,
        create_item,
        methods=["POST"],
        response_model=entity,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{name}",
    )
    admin_router.add_api_route(
        f"{path}/{{item_id}}",
        update_item,
        methods=["PATCH"],
        response_model=entity,
        name=f"update_{name}",
    )
    admin_router.add_api_route(
        f"{path}/{{item_id}}",
        delete_item,
        methods=["DELETE"],
        status_code=status.HTTP_204_NO_CONTENT,
        name=f"delete_{name}",
    )


_register_manager_routes("/features", FeatureManager, Feature, FeatureInput, FeatureUpdate)
_register_manager_routes("/team", TeamManager, TeamProfile, TeamProfileInput, TeamProfileUpdate)
_register_manager_routes("/partners", PartnerManager, Partner, PartnerInput, PartnerUpdate)
_register_manager_routes("/milestones", MilestoneManager, Milestone, MilestoneInput, MilestoneUpdate)


@admin_router.get("/stats", response_model=Page[SiteStat])
async def list_all_stats(
    _admin: AdminDep, manager: Annotated[SiteStatManager, Depends(provide(SiteStatManager))]
) -> Page[SiteStat]:
    return await manager.load_content()


@admin_router.patch("/stats/{stat_id}", response_model=SiteStat)
async def update_stat(
    stat_id: str,
    payload: SiteStatUpdate,
    _admin: AdminDep,
    manager: Annotated[SiteStatManager, Depends(provide(SiteStatManager))],
) -> SiteStat:
    result = await manager.update(stat_id, payload)
    raise_for_result(result, not_found=(manager.not_found_message,))
    return result.entity


@admin_router.get("/copy", response_model=Page[SiteContent])
async def list_copy(
    _admin: AdminDep, manager: Annotated[SiteCopyManager, Depends(provide(SiteCopyManager))]
) -> Page[SiteContent]:
    return await manager.load_all()


@admin_router.put("/copy", response_model=SiteContent)
async def save_copy(
    payload: SiteContentInput,
    _admin: AdminDep,
    manager: Annotated[SiteCopyManager, Depends(provide(SiteCopyManager))],
) -> SiteContent:
    """Create or replace the copy for one key and language."""
    result = await manager.upsert(payload)
    raise_for_result(result)
    return result.entity


@admin_router.delete("/copy/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_copy(
    content_id: str,
    _admin: AdminDep,
    manager: Annotated[SiteCopyManager, Depends(provide(SiteCopyManager))],
) -> Response:
    result = await manager.delete(content_id)
    raise_for_result(result, not_found=(CONTENT_NOT_FOUND_MESSAGE,))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
