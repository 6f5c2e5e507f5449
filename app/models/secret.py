from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SecretMessage(BaseModel):
    """A user's single secret. An empty message is a legal stored value."""

    id: Optional[str] = None
    user_id: str
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
