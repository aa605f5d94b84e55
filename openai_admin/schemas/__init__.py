from .common import (
    DeleteAcknowledgement,
    KeyCreateRequest,
    ListPage,
    ResourceRecord,
    SecretValueFields,
)
from .admin_keys import AdminKey, AdminKeyCreateResponse, AdminKeyOwner
from .organizations import Organization
from .projects import Project, ProjectApiKey, ProjectApiKeyCreateResponse

__all__ = [
    "AdminKey",
    "AdminKeyCreateResponse",
    "AdminKeyOwner",
    "DeleteAcknowledgement",
    "KeyCreateRequest",
    "ListPage",
    "Organization",
    "Project",
    "ProjectApiKey",
    "ProjectApiKeyCreateResponse",
    "ResourceRecord",
    "SecretValueFields",
]
