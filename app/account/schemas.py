from pydantic import BaseModel


class DeleteAccountResponseModel(BaseModel):
    message: str
