from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class SaveSecretModel(BaseModel):
    message: str


class SecretDetail(BaseModel):
    user_id: str
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SecretResponseModel(BaseModel):
    # null when no secret has been set
    secret: Optional[SecretDetail]
