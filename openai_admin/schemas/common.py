"""
Shared response envelopes for the admin API.

List endpoints wrap their records in the same cursor envelope, and the key
families share create and delete payload shapes.
"""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResourceRecord(BaseModel):
    """Base for a record returned by a list endpoint."""

    id: str = Field(..., description="Resource ID, unique within its family")
    object: Optional[str] = Field(None, description="Object type")


RecordT = TypeVar("RecordT", bound=ResourceRecord)


class ListPage(BaseModel, Generic[RecordT]):
    """One page of a cursor-paginated list response."""

    object: Optional[str] = Field(None, description="Envelope type, usually 'list'")
    data: List[RecordT] = Field(default_factory=list, description="Records in server order")
    first_id: Optional[str] = Field(None, description="ID of the first record in the page")
    last_id: Optional[str] = Field(None, description="ID of the last record in the page")
    has_more: bool = Field(False, description="Whether another page follows")

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("has_more", mode="before")
    @classmethod
    def _null_has_more_is_false(cls, value: Any) -> Any:
        return False if value is None else value


class SecretValueFields(BaseModel):
    """
    Candidate fields carrying a freshly issued secret.

    Only one is expected to be populated; which one depends on the
    resource family. See utils.key_values.resolve_secret_value.
    """

    model_config = ConfigDict(hide_input_in_errors=True)

    value: Optional[str] = Field(None, repr=False, description="Canonical secret field")
    token: Optional[str] = Field(None, repr=False, description="Alternate secret field")
    key: Optional[str] = Field(None, repr=False, description="Alternate secret field")
    api_key: Optional[str] = Field(None, repr=False, description="Alternate secret field")


class KeyCreateRequest(BaseModel):
    """Request body for creating a key."""

    name: str = Field(..., min_length=1, description="Key name")


class DeleteAcknowledgement(BaseModel):
    """Response returned when a resource is deleted."""

    object: Optional[str] = Field(None, description="Object type")
    id: Optional[str] = Field(None, description="Deleted resource ID")
    deleted: bool = Field(False, description="Deletion status")
