"""Folder registry models."""

from pydantic import BaseModel, Field


class FolderCreateRequest(BaseModel):
  """
  Body of ``POST /folder``.

  Both fields are optional at the schema level so that a missing value is
  reported with the API's own 400 message.
  """

  name: str | None = Field(None, description="Folder name", examples=["Docs"])
  uid: str | None = Field(None, description="Owner user id", examples=["u1"])


class FolderData(BaseModel):
  id: int = Field(..., description="Unique folder id", examples=[1])
  name: str = Field(..., examples=["Docs"])
  uid: str = Field(..., examples=["u1"])


class FolderCreateResponse(BaseModel):
  success: bool = Field(True)
  data: FolderData


class FolderListResponse(BaseModel):
  success: bool = Field(True)
  folders: list[FolderData] = Field(
    default_factory=list, description="Folders owned by the user, oldest first"
  )
