"""File storage models. Field names on the wire are camelCase."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UploadedFileData(BaseModel):
  """Identity of an uploaded object."""

  file_id: str = Field(..., alias="fileId", description="B2 file id")
  file_name: str = Field(
    ...,
    alias="fileName",
    description="Object key",
    examples=["archivos/u1/Docs/report.pdf"],
  )

  model_config = ConfigDict(populate_by_name=True)


class UploadResponse(BaseModel):
  success: bool = Field(True)
  data: UploadedFileData


class FileListResponse(BaseModel):
  success: bool = Field(True)
  files: list[dict[str, Any]] = Field(
    default_factory=list,
    description="B2 file records as returned by b2_list_file_names (at most 100)",
  )


class DeleteFileResponse(BaseModel):
  success: bool = Field(True)
  data: dict[str, Any] = Field(
    ..., description="B2 b2_delete_file_version response"
  )


class DownloadUrlResponse(BaseModel):
  """Time-limited download link; the API never proxies file bytes."""

  success: bool = Field(True)
  signed_url: str = Field(
    ...,
    alias="signedUrl",
    description="Download URL with an embedded authorization token, valid for one hour",
  )

  model_config = ConfigDict(populate_by_name=True)
