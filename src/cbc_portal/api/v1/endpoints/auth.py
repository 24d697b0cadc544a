# src/cbc_portal/api/v1/endpoints/auth.py
"""Sign-in, sign-up, OAuth and sign-out for the portal's identity."""

from fastapi import APIRouter, HTTPException, status

from cbc_portal.api.v1.dependencies import IdentityDep
from cbc_portal.schemas.auth import (
    IdentitySummary,
    OAuthRequest,
    OAuthStart,
    SignInRequest,
    SignUpRequest,
)
from cbc_portal.services.identity import IdentityContext

router = APIRouter(prefix="/auth", tags=["auth"])


def summarize(identity: IdentityContext) -> IdentitySummary:
    """Describe the identity context without exposing tokens."""
    return IdentitySummary(
        state=identity.state,
        user_id=identity.user.id if identity.user else None,
        email=identity.user.email if identity.user else None,
        member=identity.member,
        can_administer=identity.can_administer,
        is_approved=identity.is_approved,
    )


@router.get("/session", response_model=IdentitySummary)
async def get_session(identity: IdentityDep) -> IdentitySummary:
    return summarize(identity)


@router.post("/restore", response_model=IdentitySummary)
async def restore_session(identity: IdentityDep) -> IdentitySummary:
    """Look the session up again; resolves to anonymous if the lookup stalls."""
    await identity.restore()
    return summarize(identity)


@router.post("/sign-in", response_model=IdentitySummary)
async def sign_in(payload: SignInRequest, identity: IdentityDep) -> IdentitySummary:
    result = await identity.sign_in(payload.email, payload.password)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
    return summarize(identity)


@router.post("/sign-up", response_model=IdentitySummary, status_code=status.HTTP_201_CREATED)
async def sign_up(payload: SignUpRequest, identity: IdentityDep) -> IdentitySummary:
    result = await identity.sign_up(payload.email, payload.password, payload.full_name)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return summarize(identity)


@router.post("/oauth/{provider}", response_model=OAuthStart)
async def sign_in_with_oauth(
    provider: str, payload: OAuthRequest, identity: IdentityDep
) -> OAuthStart:
    result = await identity.sign_in_with_oauth(provider, payload.redirect_to)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return OAuthStart(url=result.entity)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(identity: IdentityDep) -> None:
    await identity.sign_out()
