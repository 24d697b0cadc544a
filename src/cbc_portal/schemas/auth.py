"""Request and response schemas for the identity routes."""

from typing import Literal

from pydantic import BaseModel, Field

from .member import Member


class SignInRequest(BaseModel):
    email: str = ""
    password: str = ""


class SignUpRequest(BaseModel):
    email: str = ""
    password: str = ""
    full_name: str = ""


class OAuthRequest(BaseModel):
    redirect_to: str | None = None


class OAuthStart(BaseModel):
    url: str


class IdentitySummary(BaseModel):
    """Current identity as seen by the pages."""

    state: Literal["unresolved", "anonymous", "authenticated"]
    user_id: str | None = None
    email: str | None = None
    member: Member | None = None
    can_administer: bool = False
    is_approved: bool = False


class LocaleChange(BaseModel):
    locale: str = Field(..., description="Language code, 'en' or 'rw'")


class LocaleResponse(BaseModel):
    locale: str
