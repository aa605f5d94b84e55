from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .common import ResourceRecord, SecretValueFields


class AdminKeyOwner(BaseModel):
    """User or service account that owns an admin key."""

    type: Optional[str] = Field(None, description="Owner type (user or service_account)")
    object: Optional[str] = Field(None, description="Object type")
    id: Optional[str] = Field(None, description="Owner ID")
    name: Optional[str] = Field(None, description="Owner name")
    created_at: Optional[int] = Field(None, description="Creation time in epoch seconds")
    role: Optional[str] = Field(None, description="Owner role")


class AdminKey(ResourceRecord):
    """Organization admin API key."""

    name: Optional[str] = Field(None, description="Key name")
    redacted_value: Optional[str] = Field(None, description="Masked key value")
    created_at: Optional[int] = Field(None, description="Creation time in epoch seconds")
    last_used_at: Optional[int] = Field(None, description="Last use in epoch seconds")
    owner: Optional[AdminKeyOwner] = Field(None, description="Key owner")


class AdminKeyCreateResponse(AdminKey, SecretValueFields):
    """Created admin key, including the secret shown once."""

    id: Optional[str] = Field(None, description="Resource ID, may be omitted on create")
