from __future__ import annotations

from typing import Optional

from pydantic import Field

from .common import ResourceRecord


class Organization(ResourceRecord):
    """Organization visible to the caller."""

    created: Optional[int] = Field(None, description="Creation time in epoch seconds")
    description: Optional[str] = Field(None, description="Organization description")
    is_default: Optional[bool] = Field(None, description="Whether this is the default organization")
    is_scim_managed: Optional[bool] = Field(None, description="Whether membership is SCIM managed")
    name: Optional[str] = Field(None, description="Organization name")
    personal: Optional[bool] = Field(None, description="Whether this is a personal organization")
    role: Optional[str] = Field(None, description="Caller's role in the organization")
    title: Optional[str] = Field(None, description="Display title")
    parent_org_id: Optional[str] = Field(None, description="Parent organization ID")
