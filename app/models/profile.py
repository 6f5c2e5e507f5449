from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Profile(BaseModel):
    id: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
