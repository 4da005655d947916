# model/api.py
from typing import Any
from pydantic import BaseModel


class RawSignatureResponse(BaseModel):
    signature: str
    sigKey: str


class CommitResponse(BaseModel):
    success: bool = True
    message: str = "Transaction committed and archived to recycle"
    archivedAt: str
    indexRebuilt: bool = True


class RejectResponse(BaseModel):
    success: bool = True
    message: str = "Transaction rejected and archived"
    archivedAt: str


class SaveUserRequest(BaseModel):
    # Presence is checked in UserService so a null username is a 400, not a 422
    username: str | None = None
    data: Any = None
    isNew: bool | None = False
    encryptedPassword: str | None = None
    updatePassword: bool | None = False


class SuccessResponse(BaseModel):
    success: bool = True
