"""
Pydantic schemas for portal entities, inputs and results.

Rows returned by the table backend are validated into these models at the
store boundary.
"""

from .article import Article, ArticleInput, ArticleUpdate, ArticleWithAuthor
from .auth import (
    IdentitySummary,
    LocaleChange,
    LocaleResponse,
    OAuthRequest,
    OAuthStart,
    SignInRequest,
    SignUpRequest,
)
from .common import (
    AdminStats,
    DashboardStats,
    DetailResult,
    ListCriteria,
    MutationResult,
    Page,
)
from .event import Event, EventInput, EventRSVP, EventUpdate, MemberEventRSVP
from .member import (
    AuthorSummary,
    BulkStatusChange,
    Member,
    MemberApplicationInput,
    ProfileUpdate,
    RoleChange,
    StatusChange,
)
from .project import (
    FeaturedToggle,
    Project,
    ProjectInput,
    ProjectMember,
    ProjectWithTeam,
    TeamMember,
)
from .site_content import (
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
from .subscriber import SubscribeRequest, Subscriber

__all__ = [
    "Article", "ArticleInput", "ArticleUpdate", "ArticleWithAuthor",
    "IdentitySummary", "LocaleChange", "LocaleResponse", "OAuthRequest", "OAuthStart",
    "SignInRequest", "SignUpRequest",
    "AdminStats", "DashboardStats", "DetailResult", "ListCriteria", "MutationResult", "Page",
    "Event", "EventInput", "EventRSVP", "EventUpdate", "MemberEventRSVP",
    "AuthorSummary", "BulkStatusChange", "Member", "MemberApplicationInput", "ProfileUpdate",
    "RoleChange", "StatusChange",
    "FeaturedToggle", "Project", "ProjectInput", "ProjectMember", "ProjectWithTeam", "TeamMember",
    "Feature", "FeatureInput", "FeatureUpdate", "Milestone", "MilestoneInput", "MilestoneUpdate",
    "Partner", "PartnerInput", "PartnerUpdate", "SiteContent", "SiteContentInput", "SiteStat",
    "SiteStatUpdate", "TeamProfile", "TeamProfileInput", "TeamProfileUpdate",
    "SubscribeRequest", "Subscriber",
]
