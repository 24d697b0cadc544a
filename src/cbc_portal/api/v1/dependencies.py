"""Shared API dependencies for identity gating and store construction."""

from collections.abc import Callable, Iterable
from typing import Annotated, Any, TypeVar

from fastapi import Depends, HTTPException, Query, Request, status

from cbc_portal.portal import Portal
from cbc_portal.schemas.common import ListCriteria, MutationResult
from cbc_portal.services.identity import IdentityContext
from cbc_portal.services.store import EntityStore

StoreT = TypeVar("StoreT", bound=EntityStore[Any])


def get_portal(request: Request) -> Portal:
    """Return the portal built at application startup."""
    return request.app.state.portal


PortalDep = Annotated[Portal, Depends(get_portal)]


def get_identity(portal: PortalDep) -> IdentityContext:
    return portal.identity


IdentityDep = Annotated[IdentityContext, Depends(get_identity)]


def require_authenticated(identity: IdentityDep) -> IdentityContext:
    """Reject requests without an authenticated identity.

    Raises:
        HTTPException: 401 when nobody is signed in
    """
    if not identity.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return identity


AuthenticatedDep = Annotated[IdentityContext, Depends(require_authenticated)]


def require_approved(identity: AuthenticatedDep) -> IdentityContext:
    """Reject signed-in users whose membership is not approved yet."""
    if not identity.is_approved:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Membership approval required",
        )
    return identity


ApprovedDep = Annotated[IdentityContext, Depends(require_approved)]


def require_admin(identity: AuthenticatedDep) -> IdentityContext:
    """Allow only members with role ``admin`` or ``lead``.

    Raises:
        HTTPException: 401 when anonymous, 403 for any other role
    """
    if not identity.can_administer:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return identity


AdminDep = Annotated[IdentityContext, Depends(require_admin)]


def provide(store_cls: type[StoreT]) -> Callable[[Portal], StoreT]:
    """Build a dependency that creates a fresh ``store_cls`` per request."""

    def _dependency(portal: PortalDep) -> StoreT:
        return portal.store(store_cls)

    return _dependency


def list_criteria(
    search: Annotated[str, Query(max_length=200)] = "",
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> ListCriteria:
    return ListCriteria(search=search, page=page, page_size=page_size)


CriteriaDep = Annotated[ListCriteria, Depends(list_criteria)]


def raise_for_result(
    result: MutationResult[Any],
    *,
    not_found: Iterable[str] = (),
    conflict: Iterable[str] = (),
    forbidden: Iterable[str] = (),
) -> MutationResult[Any]:
    """Translate a failed mutation into an HTTP error.

    Messages listed in ``not_found`` map to 404, ``conflict`` to 409,
    ``forbidden`` to 403 and anything else to 400.
    """
    if result.success:
        return result
    error = result.error or "Request failed"
    if any(error.startswith(message) for message in not_found):
        code = status.HTTP_404_NOT_FOUND
    elif any(error.startswith(message) for message in conflict):
        code = status.HTTP_409_CONFLICT
    elif any(error.startswith(message) for message in forbidden):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=code, detail=error)
