"""Member-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MemberRole = Literal["member", "lead", "admin"]
MemberStatus = Literal["pending", "approved", "rejected"]

ADMIN_ROLES: frozenset[str] = frozenset({"admin", "lead"})


class Member(BaseModel):
    """A registered participant of the club."""

    id: str
    email: str
    full_name: str
    student_id: str | None = None
    year_of_study: str | None = None
    department: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    role: MemberRole = "member"
    status: MemberStatus = "pending"
    joined_at: datetime
    created_at: datetime

    model_config = ConfigDict(extra="ignore")

    @property
    def can_administer(self) -> bool:
        """Return True for admins and leads."""
        return self.role in ADMIN_ROLES


class MemberApplicationInput(BaseModel):
    """Registration form submitted by a prospective member."""

    email: str = Field("", description="Contact email, unique across members")
    full_name: str = Field("", description="Applicant's full name")
    student_id: str | None = None
    year_of_study: str | None = None
    department: str | None = None
    bio: str | None = None


class ProfileUpdate(BaseModel):
    """Editable fields of a member's own profile."""

    full_name: str | None = Field(None, min_length=1, max_length=200)
    student_id: str | None = None
    year_of_study: str | None = None
    department: str | None = None
    bio: str | None = None
    avatar_url: str | None = None


class AuthorSummary(BaseModel):
    """Compact author embedded in article listings."""

    id: str
    full_name: str
    avatar_url: str | None = None

    model_config = ConfigDict(extra="ignore")


class StatusChange(BaseModel):
    status: MemberStatus


class RoleChange(BaseModel):
    role: MemberRole


class BulkStatusChange(BaseModel):
    """Apply one status to many members at once."""

    member_ids: list[str] = Field(default_factory=list)
    status: MemberStatus
