"""Newsletter subscriber schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Subscriber(BaseModel):
    """An email address subscribed to club news."""

    id: str
    email: str
    subscribed_at: datetime

    model_config = ConfigDict(extra="ignore")


class SubscribeRequest(BaseModel):
    """Newsletter sign-up form."""

    email: str = ""
