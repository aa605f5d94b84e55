from __future__ import annotations

from typing import Optional

from pydantic import Field

from .common import ResourceRecord, SecretValueFields


class Project(ResourceRecord):
    """Project within the organization."""

    name: Optional[str] = Field(None, description="Project name")
    created_at: Optional[int] = Field(None, description="Creation time in epoch seconds")
    archived_at: Optional[int] = Field(None, description="Archive time in epoch seconds")
    status: Optional[str] = Field(None, description="Project status (active or archived)")


class ProjectApiKey(ResourceRecord):
    """API key scoped to a single project."""

    name: Optional[str] = Field(None, description="Key name")
    redacted_value: Optional[str] = Field(None, description="Masked key value")
    created_at: Optional[int] = Field(None, description="Creation time in epoch seconds")
    last_used_at: Optional[int] = Field(None, description="Last use in epoch seconds")


class ProjectApiKeyCreateResponse(ProjectApiKey, SecretValueFields):
    """Created project API key, including the secret shown once."""

    id: Optional[str] = Field(None, description="Resource ID, may be omitted on create")
