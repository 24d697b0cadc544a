"""Member registration and self-service profile management."""

from __future__ import annotations

import logging

from cbc_portal.schemas.common import DetailResult, MutationResult
from cbc_portal.schemas.member import Member, MemberApplicationInput, ProfileUpdate
from cbc_portal.services.backend import DataSource
from cbc_portal.services.query import TableQuery
from cbc_portal.services.store import EntityStore, fetch_rows
from cbc_portal.services.table_client import TableError
from cbc_portal.utils.text import blank_to_none, is_valid_email

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Email and full name are required."
INVALID_EMAIL_MESSAGE = "Please enter a valid email address."
DUPLICATE_APPLICATION_MESSAGE = "An application with this email already exists."
SUBMIT_FAILED_MESSAGE = "Failed to submit application. Please try again."
PROFILE_UPDATE_FAILED_MESSAGE = "Failed to update profile. Please try again."
ACCOUNT_DELETE_FAILED_MESSAGE = "Failed to delete account. Please try again."
MEMBER_NOT_FOUND_MESSAGE = "Member not found"


class MembershipApplications(EntityStore[Member]):
    """Submission of new membership applications."""

    table = "members"
    model = Member

    async def submit(self, application: MemberApplicationInput) -> MutationResult[Member]:
        """Register a prospective member as ``pending`` with role ``member``."""

        email = application.email.strip()
        full_name = application.full_name.strip()
        if not email or not full_name:
            return MutationResult.fail(REQUIRED_FIELDS_MESSAGE)
        if not is_valid_email(email):
            return MutationResult.fail(INVALID_EMAIL_MESSAGE)

        row = {
            "email": email,
            "full_name": full_name,
            "student_id": blank_to_none(application.student_id),
            "year_of_study": blank_to_none(application.year_of_study),
            "department": blank_to_none(application.department),
            "bio": blank_to_none(application.bio),
            "role": "member",
            "status": "pending",
        }
        try:
            stored = await self.source.backend.insert(self.table, row)
        except TableError as exc:
            if exc.is_conflict:
                logger.info("Duplicate membership application for %s", email)
                return MutationResult.fail(DUPLICATE_APPLICATION_MESSAGE)
            return self.fail(SUBMIT_FAILED_MESSAGE, exc)

        member = Member.model_validate(stored)
        self.cache.insert(member)
        self.total_count += 1
        logger.info("Membership application received from %s", member.email)
        return MutationResult.ok(member)


class ProfileService:
    """Lookup, edit and deletion of a member's own record."""

    table = "members"

    def __init__(self, source: DataSource) -> None:
        self.source = source

    async def get(self, member_id: str) -> DetailResult[Member]:
        """Fetch one member by id; a missing profile is reported as not found."""
        try:
            result = await fetch_rows(self.source, TableQuery(self.table).eq("id", member_id).one())
        except TableError as exc:
            if exc.is_not_found:
                return DetailResult(not_found=True, error=MEMBER_NOT_FOUND_MESSAGE)
            logger.error("Failed to load member %s: %s", member_id, exc, exc_info=True)
            return DetailResult(error=exc.message)
        return DetailResult(entity=Member.model_validate(result.rows[0]))

    async def update(self, member_id: str, changes: ProfileUpdate) -> MutationResult[Member]:
        patch = changes.model_dump(exclude_unset=True)
        for key, value in patch.items():
            if isinstance(value, str):
                patch[key] = blank_to_none(value)
        if "full_name" in patch and not patch["full_name"]:
            return MutationResult.fail("Full name is required")
        if not patch:
            current = await self.get(member_id)
            if current.entity is None:
                return MutationResult.fail(current.error or MEMBER_NOT_FOUND_MESSAGE)
            return MutationResult.ok(current.entity)

        try:
            rows = await self.source.backend.update(
                self.table, patch, TableQuery(self.table).eq("id", member_id).filters
            )
        except TableError as exc:
            logger.error("Error updating profile %s: %s", member_id, exc, exc_info=True)
            return MutationResult.fail(PROFILE_UPDATE_FAILED_MESSAGE)
        if not rows:
            return MutationResult.fail(MEMBER_NOT_FOUND_MESSAGE)
        return MutationResult.ok(Member.model_validate(rows[0]))

    async def delete(self, member_id: str) -> MutationResult[Member]:
        """Delete the member; RSVPs, memberships and articles go with it."""
        try:
            rows = await self.source.backend.delete(
                self.table, TableQuery(self.table).eq("id", member_id).filters
            )
        except TableError as exc:
            logger.error("Error deleting account %s: %s", member_id, exc, exc_info=True)
            return MutationResult.fail(ACCOUNT_DELETE_FAILED_MESSAGE)
        if not rows:
            return MutationResult.fail(MEMBER_NOT_FOUND_MESSAGE)
        logger.info("Deleted member account %s", member_id)
        return MutationResult.ok(Member.model_validate(rows[0]))
