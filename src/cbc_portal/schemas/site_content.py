"""Bilingual site content shown on the home, about and team pages.

Editable rows carry English and Kinyarwanda variants side by side
(``title_en`` / ``title_rw``). :meth:`BilingualModel.localize` fills the plain
field (``title``) for the reader's language, falling back to English when no
translation exists.
"""

import datetime as dt
from typing import ClassVar, Literal, Self

from pydantic import BaseModel, ConfigDict

ContentLanguage = Literal["en", "rw"]
PartnerTier = Literal["platinum", "gold", "silver", "partner"]

# Display rank of partner tiers, highest first
PARTNER_TIER_RANK: dict[str, int] = {"platinum": 0, "gold": 1, "silver": 2, "partner": 3}


class BilingualModel(BaseModel):
    """Row with ``<field>_en`` and ``<field>_rw`` pairs."""

    localized_fields: ClassVar[tuple[str, ...]] = ()

    model_config = ConfigDict(extra="ignore")

    def localize(self, locale: str) -> Self:
        values = {}
        for name in self.localized_fields:
            translated = getattr(self, f"{name}_rw")
            values[name] = translated if locale == "rw" and translated else getattr(self, f"{name}_en")
        return self.model_copy(update=values)


class Feature(BilingualModel):
    """A "why join" card on the home page."""

    localized_fields: ClassVar[tuple[str, ...]] = ("title", "description")

    id: str
    icon: str | None = None
    title_en: str
    title_rw: str | None = None
    description_en: str
    description_rw: str | None = None
    sort_order: int = 0
    is_active: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    title: str | None = None
    description: str | None = None


class FeatureInput(BaseModel):
    icon: str | None = None
    title_en: str = ""
    title_rw: str | None = None
    description_en: str = ""
    description_rw: str | None = None
    sort_order: int = 0
    is_active: bool = True


class FeatureUpdate(BaseModel):
    icon: str | None = None
    title_en: str | None = None
    title_rw: str | None = None
    description_en: str | None = None
    description_rw: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class TeamProfile(BilingualModel):
    """A club leader listed on the team page."""

    localized_fields: ClassVar[tuple[str, ...]] = ("role", "bio")

    id: str
    name: str
    role_en: str
    role_rw: str | None = None
    bio_en: str | None = None
    bio_rw: str | None = None
    image_url: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    github_url: str | None = None
    sort_order: int = 0
    is_active: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    role: str | None = None
    bio: str | None = None


class TeamProfileInput(BaseModel):
    name: str = ""
    role_en: str = ""
    role_rw: str | None = None
    bio_en: str | None = None
    bio_rw: str | None = None
    image_url: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    github_url: str | None = None
    sort_order: int = 0
    is_active: bool = True


class TeamProfileUpdate(BaseModel):
    name: str | None = None
    role_en: str | None = None
    role_rw: str | None = None
    bio_en: str | None = None
    bio_rw: str | None = None
    image_url: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    github_url: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class Partner(BilingualModel):
    """A sponsoring or supporting organisation."""

    localized_fields: ClassVar[tuple[str, ...]] = ("description",)

    id: str
    name: str
    logo_url: str | None = None
    website_url: str | None = None
    description_en: str | None = None
    description_rw: str | None = None
    tier: PartnerTier = "partner"
    sort_order: int = 0
    is_active: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    description: str | None = None


class PartnerInput(BaseModel):
    name: str = ""
    logo_url: str | None = None
    website_url: str | None = None
    description_en: str | None = None
    description_rw: str | None = None
    tier: PartnerTier = "partner"
    sort_order: int = 0
    is_active: bool = True


class PartnerUpdate(BaseModel):
    name: str | None = None
    logo_url: str | None = None
    website_url: str | None = None
    description_en: str | None = None
    description_rw: str | None = None
    tier: PartnerTier | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class Milestone(BilingualModel):
    """An entry on the club history timeline."""

    localized_fields: ClassVar[tuple[str, ...]] = ("title", "description")

    id: str
    date: dt.date
    title_en: str
    title_rw: str | None = None
    description_en: str | None = None
    description_rw: str | None = None
    icon: str | None = None
    is_active: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    title: str | None = None
    description: str | None = None


class MilestoneInput(BaseModel):
    date: dt.date | None = None
    title_en: str = ""
    title_rw: str | None = None
    description_en: str | None = None
    description_rw: str | None = None
    icon: str | None = None
    is_active: bool = True


class MilestoneUpdate(BaseModel):
    date: dt.date | None = None
    title_en: str | None = None
    title_rw: str | None = None
    description_en: str | None = None
    description_rw: str | None = None
    icon: str | None = None
    is_active: bool | None = None


class SiteStat(BilingualModel):
    """A headline counter such as "120 Active Members"."""

    localized_fields: ClassVar[tuple[str, ...]] = ("label",)

    id: str
    key: str
    value: int = 0
    label_en: str
    label_rw: str | None = None
    icon: str | None = None
    sort_order: int = 0
    is_active: bool = True
    updated_at: dt.datetime | None = None

    label: str | None = None


class SiteStatUpdate(BaseModel):
    value: int | None = None
    label_en: str | None = None
    label_rw: str | None = None
    icon: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class SiteContent(BaseModel):
    """One translated piece of page copy, unique per ``key`` and ``language``."""

    id: str
    key: str
    language: ContentLanguage
    value: str
    category: str | None = None
    updated_at: dt.datetime | None = None

    model_config = ConfigDict(extra="ignore")


class SiteContentInput(BaseModel):
    key: str = ""
    language: ContentLanguage = "en"
    value: str = ""
    category: str | None = None
