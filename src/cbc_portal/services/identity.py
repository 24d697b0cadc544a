"""Process-wide identity context.

Holds the signed-in user, their session and their member profile. The
context moves from ``unresolved`` to ``anonymous`` or ``authenticated`` and
every provider call that could hang is bounded by a deadline, so the
context always reaches a resolved state.
"""

from __future__ import annotations

import logging
from typing import Literal

from cbc_portal.core.settings import settings
from cbc_portal.schemas.common import MutationResult
from cbc_portal.schemas.member import Member, ProfileUpdate
from cbc_portal.services.auth_provider import AuthProvider, AuthProviderError, AuthSession, AuthUser
from cbc_portal.services.bounded import OperationTimeoutError, bounded
from cbc_portal.services.members import ProfileService

logger = logging.getLogger(__name__)

IdentityState = Literal["unresolved", "anonymous", "authenticated"]

CREDENTIALS_REQUIRED_MESSAGE = "Email and password are required."
SIGN_UP_FIELDS_REQUIRED_MESSAGE = "Email, password and full name are required."
SIGN_IN_FAILED_MESSAGE = "Sign in failed"
CONFIRM_EMAIL_MESSAGE = "Check your email to confirm your account."


class IdentityContext:
    """Current user, session and member profile."""

    def __init__(
        self,
        provider: AuthProvider,
        profiles: ProfileService,
        *,
        restore_timeout: float | None = None,
        auth_timeout: float | None = None,
        sign_out_timeout: float | None = None,
    ) -> None:
        self.provider = provider
        self.profiles = profiles
        self.restore_timeout = restore_timeout or settings.session_restore_timeout_seconds
        self.auth_timeout = auth_timeout or settings.auth_timeout_seconds
        self.sign_out_timeout = sign_out_timeout or settings.sign_out_timeout_seconds

        self.state: IdentityState = "unresolved"
        self.session: AuthSession | None = None
        self.user: AuthUser | None = None
        self.member: Member | None = None

    @property
    def is_loading(self) -> bool:
        return self.state == "unresolved"

    @property
    def is_authenticated(self) -> bool:
        return self.state == "authenticated" and self.user is not None

    @property
    def can_administer(self) -> bool:
        """Return True when the member's role is ``admin`` or ``lead``."""
        return self.is_authenticated and self.member is not None and self.member.can_administer

    @property
    def is_approved(self) -> bool:
        return self.is_authenticated and self.member is not None and self.member.status == "approved"

    def access_token(self) -> str | None:
        return self.session.access_token if self.session else None

    def _clear(self) -> None:
        self.session = None
        self.user = None
        self.member = None
        self.state = "anonymous"

    async def _authenticate(self, session: AuthSession) -> None:
        self.session = session
        self.user = session.user
        self.state = "authenticated"
        logger.info("Identity authenticated as %s", session.user.id)
        await self.refresh_member()

    async def restore(self) -> IdentityState:
        """Resolve the startup session within the restore deadline."""
        try:
            session = await bounded(
                self.provider.get_session(), self.restore_timeout, operation="Session restore"
            )
        except OperationTimeoutError:
            logger.warning("Session restore timed out after %.1fs", self.restore_timeout)
            self._clear()
            return self.state
        except AuthProviderError as exc:
            logger.warning("Session restore failed: %s", exc.message)
            self._clear()
            return self.state

        if session is None:
            self._clear()
        else:
            await self._authenticate(session)
        return self.state

    async def refresh_member(self) -> Member | None:
        """Reload the member profile of the signed-in user."""
        if self.user is None:
            self.member = None
            return None
        result = await self.profiles.get(self.user.id)
        if result.not_found:
            logger.info("No member profile for user %s", self.user.id)
        elif result.error:
            logger.error("Error fetching member %s: %s", self.user.id, result.error)
        self.member = result.entity
        return self.member

    async def sign_in(self, email: str, password: str) -> MutationResult[AuthUser]:
        email = (email or "").strip()
        if not email or not password:
            return MutationResult.fail(CREDENTIALS_REQUIRED_MESSAGE)
        try:
            session = await bounded(
                self.provider.sign_in_with_password(email, password),
                self.auth_timeout,
                operation="Sign in",
            )
        except OperationTimeoutError as exc:
            logger.warning("Sign in for %s timed out", email)
            return MutationResult.fail(exc.message)
        except AuthProviderError as exc:
            return MutationResult.fail(exc.message or SIGN_IN_FAILED_MESSAGE)

        await self._authenticate(session)
        return MutationResult.ok(session.user)

    async def sign_up(self, email: str, password: str, full_name: str) -> MutationResult[AuthUser]:
        """Create an account; the member profile comes later via an application."""
        email = (email or "").strip()
        full_name = (full_name or "").strip()
        if not email or not password or not full_name:
            return MutationResult.fail(SIGN_UP_FIELDS_REQUIRED_MESSAGE)
        try:
            session = await bounded(
                self.provider.sign_up(email, password, full_name),
                self.auth_timeout,
                operation="Sign up",
            )
        except OperationTimeoutError as exc:
            return MutationResult.fail(exc.message)
        except AuthProviderError as exc:
            return MutationResult.fail(exc.message)

        if session is None:
            return MutationResult(success=True, error=CONFIRM_EMAIL_MESSAGE)
        await self._authenticate(session)
        return MutationResult.ok(session.user)

    async def sign_in_with_oauth(
        self, provider: str, redirect_to: str | None = None
    ) -> MutationResult[str]:
        """Start an OAuth sign-in; the result carries the URL to visit."""
        try:
            url = await bounded(
                self.provider.sign_in_with_oauth(provider, redirect_to or settings.oauth_redirect_url),
                self.auth_timeout,
                operation="Sign in",
            )
        except OperationTimeoutError as exc:
            return MutationResult.fail(exc.message)
        except AuthProviderError as exc:
            return MutationResult.fail(exc.message)
        return MutationResult.ok(url)

    async def sign_out(self) -> None:
        """Forget the local identity first, then tell the provider."""
        self._clear()
        try:
            await bounded(self.provider.sign_out(), self.sign_out_timeout, operation="Sign out")
        except (OperationTimeoutError, AuthProviderError) as exc:
            logger.error("Sign out error (state already cleared): %s", exc)

    async def update_profile(self, changes: ProfileUpdate) -> MutationResult[Member]:
        if self.user is None:
            return MutationResult.fail("Not authenticated")
        result = await self.profiles.update(self.user.id, changes)
        if result.success:
            self.member = result.entity
        return result

    async def delete_account(self) -> MutationResult[Member]:
        """Delete the member record and sign out."""
        if self.user is None:
            return MutationResult.fail("Not authenticated")
        result = await self.profiles.delete(self.user.id)
        if result.success:
            await self.sign_out()
        return result
