"""Newsletter subscriptions."""

from __future__ import annotations

import logging

from cbc_portal.schemas.common import MutationResult
from cbc_portal.schemas.subscriber import Subscriber
from cbc_portal.services.store import EntityStore
from cbc_portal.services.table_client import TableError
from cbc_portal.utils.text import is_valid_email

logger = logging.getLogger(__name__)

INVALID_EMAIL_MESSAGE = "Please enter a valid email address."
SUBSCRIBE_FAILED_MESSAGE = "Failed to subscribe. Please try again."


class NewsletterSubscriptions(EntityStore[Subscriber]):
    """Sign-ups for club news; subscribing twice is not an error."""

    table = "subscribers"
    model = Subscriber
    search_columns = ("email",)
    order_column = "subscribed_at"

    async def subscribe(self, email: str) -> MutationResult[Subscriber]:
        email = (email or "").strip()
        if not email or not is_valid_email(email):
            return MutationResult.fail(INVALID_EMAIL_MESSAGE)

        self.is_loading = True
        try:
            stored = await self.source.backend.insert(self.table, {"email": email})
        except TableError as exc:
            if exc.is_conflict:
                logger.info("Email %s already subscribed", email)
                return MutationResult.ok()
            return self.fail(SUBSCRIBE_FAILED_MESSAGE, exc)
        finally:
            self.is_loading = False

        subscriber = Subscriber.model_validate(stored)
        self.cache.insert(subscriber)
        self.total_count += 1
        return MutationResult.ok(subscriber)
