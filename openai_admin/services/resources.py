"""
Resource families of the admin API.

Each family is described once by a ResourceFamily (endpoint, record model,
table columns, row projection) and served by the generic ResourceOperations,
so the pagination and normalization rules live in exactly one place.
"""

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
)
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from ..api.admin_client import AdminClient
from ..core.exceptions import ConfigurationError, TransportError
from ..schemas import (
    AdminKey,
    AdminKeyCreateResponse,
    DeleteAcknowledgement,
    KeyCreateRequest,
    ListPage,
    Organization,
    Project,
    ProjectApiKey,
    ProjectApiKeyCreateResponse,
    ResourceRecord,
    SecretValueFields,
)
from ..utils.key_values import is_admin_variant, resolve_secret_value
from ..utils.timestamps import (
    format_bool,
    format_epoch_seconds_optional,
)
from .pagination import list_all


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceFamily:
    """Static description of one resource family."""

    name: str
    path_template: str
    record_model: Type[ResourceRecord]
    columns: Tuple[str, ...]
    project_row: Callable[[Any], List[str]]
    created_model: Optional[Type[SecretValueFields]] = None
    supports_delete: bool = False

    def path(self, **path_args: str) -> str:
        """Endpoint path with each template argument path-escaped."""
        escaped = {name: quote(str(value), safe='') for name, value in path_args.items()}
        try:
            return self.path_template.format(**escaped)
        except KeyError as e:
            raise ConfigurationError(
                f"{self.name} requires a value for {e.args[0]}"
            ) from e


def _admin_key_row(key: AdminKey) -> List[str]:
    owner = key.owner
    return [
        key.id,
        key.name or "",
        format_bool(is_admin_variant(key.redacted_value)),
        format_epoch_seconds_optional(key.created_at),
        format_epoch_seconds_optional(key.last_used_at),
        (owner.type or "") if owner else "",
        (owner.role or "") if owner else "",
        (owner.name or "") if owner else "",
    ]


def _organization_row(org: Organization) -> List[str]:
    return [
        format_bool(org.is_default),
        org.id,
        org.name or "",
        org.title or "",
        format_bool(org.personal),
        org.role or "",
        format_epoch_seconds_optional(org.created),
        org.description or "",
    ]


def _project_row(project: Project) -> List[str]:
    return [
        project.id,
        project.name or "",
        project.status or "",
        format_epoch_seconds_optional(project.created_at),
        format_epoch_seconds_optional(project.archived_at),
    ]


def _project_api_key_row(key: ProjectApiKey) -> List[str]:
    return [
        key.id,
        key.name or "",
        format_epoch_seconds_optional(key.created_at),
        format_epoch_seconds_optional(key.last_used_at),
        key.redacted_value or "",
    ]


ADMIN_KEYS = ResourceFamily(
    name="admin keys",
    path_template="/organization/admin_api_keys",
    record_model=AdminKey,
    columns=(
        "ID",
        "NAME",
        "IS_ADMIN",
        "CREATED_AT",
        "LAST_USED_AT",
        "OWNER_TYPE",
        "OWNER_ROLE",
        "OWNER_NAME",
    ),
    project_row=_admin_key_row,
    created_model=AdminKeyCreateResponse,
    supports_delete=True,
)

ORGANIZATIONS = ResourceFamily(
    name="organizations",
    path_template="/organizations",
    record_model=Organization,
    columns=("DEFAULT", "ID", "NAME", "TITLE", "PERSONAL", "ROLE", "CREATED", "DESCRIPTION"),
    project_row=_organization_row,
)

PROJECTS = ResourceFamily(
    name="projects",
    path_template="/organization/projects",
    record_model=Project,
    columns=("ID", "NAME", "STATUS", "CREATED_AT", "ARCHIVED_AT"),
    project_row=_project_row,
)

PROJECT_API_KEYS = ResourceFamily(
    name="project API keys",
    path_template="/organization/projects/{project_id}/api_keys",
    record_model=ProjectApiKey,
    columns=("ID", "NAME", "CREATED_AT", "LAST_USED_AT", "REDACTED_VALUE"),
    project_row=_project_api_key_row,
    created_model=ProjectApiKeyCreateResponse,
    supports_delete=True,
)


def _decode(
    model: Type[BaseModel],
    payload: Any,
    what: str
) -> Any:
    """
    Validate a decoded JSON payload, reporting failures as TransportError.

    The payload itself never appears in the message or logs; create
    responses carry a freshly issued secret.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in e.errors(include_url=False, include_input=False)
        )
        raise TransportError(f"Failed to decode {what} response: {problems}") from None


class ResourceOperations:
    """List, create and delete operations for one resource family."""

    def __init__(
        self,
        client: AdminClient,
        family: ResourceFamily
    ):
        self.client = client
        self.family = family
        self._page_model = ListPage[family.record_model]

    def list(
        self,
        page_size: Optional[int] = None,
        params: Optional[Dict[str, Any]] = None,
        **path_args: str
    ) -> Iterator[ResourceRecord]:
        """
        Lazily yield every record of the family.

        Args:
            page_size: Records per page, clamped into 1..100
            params: Extra query parameters sent with every page request
            **path_args: Values for the endpoint path template

        Yields:
            Records in server order across all pages

        Raises:
            TransportError: If a page request fails or cannot be decoded
        """
        path = self.family.path(**path_args)
        extra_params = dict(params or {})

        def fetch_page(page_params: Dict[str, Any]) -> ListPage:
            payload = self.client.get(path, params={**extra_params, **page_params})
            return _decode(self._page_model, payload, f"{self.family.name} list")

        logger.debug(f"Listing {self.family.name} from {path}")
        return list_all(fetch_page, page_size)

    def rows(self, records: Iterable[ResourceRecord]) -> Iterator[List[str]]:
        """Project records onto the family's table columns."""
        for record in records:
            yield self.family.project_row(record)

    def create(
        self,
        name: str,
        **path_args: str
    ) -> Tuple[SecretValueFields, str]:
        """
        Create a key and return it with its secret value.

        The secret is returned to the caller for one-time display and is
        never logged.

        Args:
            name: Name of the new key
            **path_args: Values for the endpoint path template

        Returns:
            Tuple of (created record, secret value)

        Raises:
            ConfigurationError: If the family does not support create or name is empty
            TransportError: If the request fails
            MissingSecretValue: If the response carries no secret
        """
        if self.family.created_model is None:
            raise ConfigurationError(f"{self.family.name} cannot be created")
        if not name:
            raise ConfigurationError("--name is required")

        request = KeyCreateRequest(name=name)
        path = self.family.path(**path_args)

        logger.info(f"Creating {self.family.name} entry: {name}")
        payload = self.client.post(path, body=request.model_dump())

        created = _decode(self.family.created_model, payload, f"{self.family.name} create")
        return created, resolve_secret_value(created)

    def delete(
        self,
        resource_id: str,
        **path_args: str
    ) -> DeleteAcknowledgement:
        """
        Delete one resource by ID.

        If the server omits the id from its acknowledgement, the requested
        resource_id is reported instead.

        Raises:
            ConfigurationError: If the family does not support delete
            TransportError: If the request fails
        """
        if not self.family.supports_delete:
            raise ConfigurationError(f"{self.family.name} cannot be deleted")

        path = f"{self.family.path(**path_args)}/{quote(resource_id, safe='')}"

        logger.info(f"Deleting {self.family.name} entry: {resource_id}")
        payload = self.client.delete(path)

        result = _decode(DeleteAcknowledgement, payload, f"{self.family.name} delete")
        if not result.id:
            result.id = resource_id
        return result
