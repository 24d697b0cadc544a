"""Project showcase schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Project(BaseModel):
    """A member-built project shown in the showcase."""

    id: str
    title: str
    description: str | None = None
    long_description: str | None = None
    category: str | None = None
    image_url: str | None = None
    github_url: str | None = None
    demo_url: str | None = None
    tech_stack: list[str] | None = None
    is_featured: bool = False
    created_at: datetime

    model_config = ConfigDict(extra="ignore")


class TeamMember(BaseModel):
    """Display entry for a project contributor."""

    initials: str
    name: str


class ProjectWithTeam(Project):
    """Project enriched with its contributors."""

    team: list[TeamMember] = Field(default_factory=list)


class ProjectMember(BaseModel):
    """Join row linking a member to a project."""

    project_id: str
    member_id: str
    role: str = "member"

    model_config = ConfigDict(extra="ignore")


class FeaturedToggle(BaseModel):
    """Admin request to feature or unfeature a project."""

    is_featured: bool


class ProjectInput(BaseModel):
    """Payload used by a member to submit a project."""

    title: str = ""
    description: str | None = None
    category: str | None = None
    github_url: str | None = None
    demo_url: str | None = None
    tech_stack: list[str] | None = None
    image_url: str | None = None
