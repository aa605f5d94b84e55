#!/usr/bin/env python3
"""
Organization Admin CLI.

Command-line interface for listing and managing admin API keys,
organizations, projects and project API keys.

Admin Keys:
    # List admin API keys
    openai-admin admin-keys list

    # Create an admin API key (prints the secret once)
    openai-admin admin-keys create --name ci-bot

    # Delete an admin API key
    openai-admin admin-keys delete key_abc123

Organizations:
    openai-admin organizations list --limit 20

Projects:
    # List active projects
    openai-admin projects list

    # Include archived projects, one JSON object per line
    openai-admin projects list --include-archived --json

Project API Keys:
    # List keys of a project
    openai-admin projects api-keys --project-id proj_abc list

    # Same, taking the project from the environment
    export OPENAI_PROJECT_ID=proj_abc
    openai-admin projects api-keys list

    # Delete a project API key
    openai-admin projects api-keys delete key_abc123

Global Options (can be set via environment variables or command-line arguments):
    --api-key KEY            Admin API key (overrides OPENAI_ADMIN_KEY / OPENAI_API_KEY)
    --base-url URL           API base URL (overrides OPENAI_BASE_URL)
    --organization ORG_ID    Organization ID (overrides OPENAI_ORG_ID)
    --debug                  Enable debug logging
"""

import argparse
import json
import logging
import sys
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from ..api.admin_client import AdminClient
from ..core.config import Settings, resolve_api_key, resolve_project_id
from ..core.exceptions import AdminCliError, ConfigurationError
from ..schemas import ResourceRecord
from ..services.resources import (
    ADMIN_KEYS,
    ORGANIZATIONS,
    PROJECT_API_KEYS,
    PROJECTS,
    ResourceFamily,
    ResourceOperations,
)
from ..utils.table import TableWriter
from ..utils.timestamps import format_bool
from ..version import __version__

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s,p%(process)s,{%(filename)s:%(lineno)d},%(levelname)s,%(message)s",
)
logger = logging.getLogger(__name__)


CommandHandler = Callable[[argparse.Namespace, Settings], int]


def _create_client(
    args: argparse.Namespace,
    settings: Settings
) -> AdminClient:
    """
    Create and return a configured AdminClient instance.

    Args:
        args: Command arguments containing optional CLI values
        settings: Loaded settings used when CLI values are absent

    Returns:
        AdminClient instance

    Raises:
        ConfigurationError: If no API key is configured
    """
    api_key = resolve_api_key(args.api_key, settings)
    base_url = args.base_url or settings.openai_base_url
    organization = args.organization or settings.openai_org_id

    logger.debug(f"Using API base URL: {base_url}")
    return AdminClient(
        api_key=api_key,
        base_url=base_url,
        organization=organization,
        timeout=settings.request_timeout_seconds
    )


def _operations(
    family: ResourceFamily,
    args: argparse.Namespace,
    settings: Settings
) -> ResourceOperations:
    return ResourceOperations(_create_client(args, settings), family)


def _page_size(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    limit = getattr(args, "limit", None)
    return limit if limit is not None else settings.default_page_size


def _write_records(
    operations: ResourceOperations,
    records: Iterable[ResourceRecord],
    as_json: bool
) -> int:
    """
    Stream records to stdout as a table or as JSON lines.

    Rows gathered before a failing page are still written, since the
    table is flushed when the writer closes.

    Returns:
        Number of records written
    """
    count = 0
    if as_json:
        for record in records:
            print(json.dumps(record.model_dump(exclude_none=True), default=str), flush=True)
            count += 1
        return count

    with TableWriter(operations.family.columns) as table:
        for row in operations.rows(records):
            table.add_row(row)
            count += 1
    return count


def _print_deleted(
    deleted: bool,
    resource_id: str
) -> None:
    print(f"DELETED\t{format_bool(deleted)}\t{resource_id}")


# Admin Key Command Handlers


def cmd_admin_keys_list(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    List admin API keys.

    Args:
        args: Command arguments
        settings: Loaded settings

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        operations = _operations(ADMIN_KEYS, args, settings)
        records = operations.list(page_size=_page_size(args, settings))
        count = _write_records(operations, records, args.json)

        logger.debug(f"Listed {count} admin keys")
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except AdminCliError as e:
        logger.error(f"List admin keys failed: {e}")
        return 1


def cmd_admin_keys_create(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    Create an admin API key and print its secret value.

    Args:
        args: Command arguments
        settings: Loaded settings

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        if not args.name:
            raise ConfigurationError("--name is required")

        operations = _operations(ADMIN_KEYS, args, settings)
        created, secret = operations.create(args.name)

        logger.info(f"Admin key created: {created.id or args.name}")
        print(secret)
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except AdminCliError as e:
        logger.error(f"Create admin key failed: {e}")
        return 1


def cmd_admin_keys_delete(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    Delete an admin API key.

    Args:
        args: Command arguments
        settings: Loaded settings

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        operations = _operations(ADMIN_KEYS, args, settings)
        result = operations.delete(args.key_id)

        _print_deleted(result.deleted, result.id)
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except AdminCliError as e:
        logger.error(f"Delete admin key failed: {e}")
        return 1


# Organization and Project Command Handlers


def cmd_organizations_list(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    List organizations.

    Args:
        args: Command arguments
        settings: Loaded settings

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        operations = _operations(ORGANIZATIONS, args, settings)
        records = operations.list(page_size=_page_size(args, settings))
        count = _write_records(operations, records, args.json)

        logger.debug(f"Listed {count} organizations")
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except AdminCliError as e:
        logger.error(f"List organizations failed: {e}")
        return 1


def cmd_projects_list(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    List projects, optionally including archived ones.

    Args:
        args: Command arguments
        settings: Loaded settings

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        operations = _operations(PROJECTS, args, settings)
        records = operations.list(
            page_size=_page_size(args, settings),
            params={"include_archived": format_bool(args.include_archived)}
        )
        count = _write_records(operations, records, args.json)

        logger.debug(f"Listed {count} projects")
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except AdminCliError as e:
        logger.error(f"List projects failed: {e}")
        return 1


# Project API Key Command Handlers


def cmd_project_api_keys_list(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    List API keys of a project.

    Args:
        args: Command arguments
        settings: Loaded settings

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        project_id = resolve_project_id(args.project_id, settings)
        operations = _operations(PROJECT_API_KEYS, args, settings)
        records = operations.list(
            page_size=_page_size(args, settings),
            project_id=project_id
        )
        count = _write_records(operations, records, args.json)

        logger.debug(f"Listed {count} API keys for project {project_id}")
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except AdminCliError as e:
        logger.error(f"List project API keys failed: {e}")
        return 1


def cmd_project_api_keys_create(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    Create a project API key and print its secret value.

    Args:
        args: Command arguments
        settings: Loaded settings

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        project_id = resolve_project_id(args.project_id, settings)
        if not args.name:
            raise ConfigurationError("--name is required")

        operations = _operations(PROJECT_API_KEYS, args, settings)
        created, secret = operations.create(args.name, project_id=project_id)

        logger.info(f"Project API key created: {created.id or args.name}")
        print(secret)
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except AdminCliError as e:
        logger.error(f"Create project API key failed: {e}")
        return 1


def cmd_project_api_keys_delete(
    args: argparse.Namespace,
    settings: Settings
) -> int:
    """
    Delete a project API key.

    Args:
        args: Command arguments
        settings: Loaded settings

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        project_id = resolve_project_id(args.project_id, settings)
        operations = _operations(PROJECT_API_KEYS, args, settings)
        result = operations.delete(args.key_id, project_id=project_id)

        _print_deleted(result.deleted, result.id)
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except AdminCliError as e:
        logger.error(f"Delete project API key failed: {e}")
        return 1


COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "admin-keys list": cmd_admin_keys_list,
    "admin-keys create": cmd_admin_keys_create,
    "admin-keys delete": cmd_admin_keys_delete,
    "organizations list": cmd_organizations_list,
    "projects list": cmd_projects_list,
    "projects api-keys list": cmd_project_api_keys_list,
    "projects api-keys create": cmd_project_api_keys_create,
    "projects api-keys delete": cmd_project_api_keys_delete,
}


def _add_list_arguments(
    parser: argparse.ArgumentParser,
    what: str
) -> None:
    parser.add_argument(
        "--limit",
        type=int,
        help=f"Max {what} per page (1-100, default 100)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per record instead of a table"
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line parser with every command registered.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="openai-admin",
        description="Organization administration CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (used if command-line options not provided):
  OPENAI_ADMIN_KEY    Admin API key (preferred)
  OPENAI_API_KEY      API key used when OPENAI_ADMIN_KEY is not set
  OPENAI_BASE_URL     API base URL (default: https://api.openai.com/v1)
  OPENAI_ORG_ID       Organization ID sent with each request
  OPENAI_PROJECT_ID   Default project for 'projects api-keys' commands

Examples:
  openai-admin admin-keys list
  openai-admin admin-keys create --name ci-bot
  openai-admin projects list --include-archived
  openai-admin projects api-keys --project-id proj_abc list
        """
    )

    parser.add_argument(
        "--api-key",
        help="Admin API key (overrides OPENAI_ADMIN_KEY / OPENAI_API_KEY env vars)"
    )

    parser.add_argument(
        "--base-url",
        help="API base URL (overrides OPENAI_BASE_URL env var)"
    )

    parser.add_argument(
        "--organization",
        help="Organization ID (overrides OPENAI_ORG_ID env var)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    resources = parser.add_subparsers(dest="resource", help="Resource to manage")

    # Admin keys
    admin_keys_parser = resources.add_parser("admin-keys", help="Manage admin API keys")
    admin_keys_actions = admin_keys_parser.add_subparsers(dest="action", help="Action")

    admin_keys_list_parser = admin_keys_actions.add_parser("list", help="List admin API keys")
    _add_list_arguments(admin_keys_list_parser, "admin keys")

    admin_keys_create_parser = admin_keys_actions.add_parser("create", help="Create an admin API key")
    admin_keys_create_parser.add_argument(
        "--name",
        help="Name for the admin API key"
    )

    admin_keys_delete_parser = admin_keys_actions.add_parser("delete", help="Delete an admin API key")
    admin_keys_delete_parser.add_argument(
        "key_id",
        help="ID of the admin API key to delete"
    )

    # Organizations
    organizations_parser = resources.add_parser("organizations", help="Manage organizations")
    organizations_actions = organizations_parser.add_subparsers(dest="action", help="Action")

    organizations_list_parser = organizations_actions.add_parser("list", help="List organizations")
    _add_list_arguments(organizations_list_parser, "organizations")

    # Projects
    projects_parser = resources.add_parser("projects", help="Manage projects")
    projects_actions = projects_parser.add_subparsers(dest="action", help="Action")

    projects_list_parser = projects_actions.add_parser("list", help="List projects")
    _add_list_arguments(projects_list_parser, "projects")
    projects_list_parser.add_argument(
        "--include-archived",
        action="store_true",
        help="Include archived projects"
    )

    # Project API keys; --project-id is accepted before or after the action
    project_id_help = "Project ID (or set OPENAI_PROJECT_ID)"
    api_keys_parser = projects_actions.add_parser("api-keys", help="Manage project API keys")
    api_keys_parser.add_argument("--project-id", help=project_id_help)
    api_keys_actions = api_keys_parser.add_subparsers(dest="key_action", help="Action")

    project_id_parent = argparse.ArgumentParser(add_help=False)
    project_id_parent.add_argument(
        "--project-id",
        default=argparse.SUPPRESS,
        help=project_id_help
    )

    api_keys_list_parser = api_keys_actions.add_parser(
        "list",
        parents=[project_id_parent],
        help="List project API keys"
    )
    _add_list_arguments(api_keys_list_parser, "API keys")

    api_keys_create_parser = api_keys_actions.add_parser(
        "create",
        parents=[project_id_parent],
        help="Create a project API key"
    )
    api_keys_create_parser.add_argument(
        "--name",
        help="Name for the project API key"
    )

    api_keys_delete_parser = api_keys_actions.add_parser(
        "delete",
        parents=[project_id_parent],
        help="Delete a project API key"
    )
    api_keys_delete_parser.add_argument(
        "key_id",
        help="ID of the project API key to delete"
    )

    return parser


def _command_name(args: argparse.Namespace) -> str:
    parts = [
        getattr(args, "resource", None),
        getattr(args, "action", None),
        getattr(args, "key_action", None),
    ]
    return " ".join(part for part in parts if part)


def main(
    argv: Optional[List[str]] = None,
    settings: Optional[Settings] = None
) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        settings: Preloaded settings (defaults to reading the environment)

    Returns:
        Exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Enable debug logging if requested
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    command = _command_name(args)
    handler = COMMAND_HANDLERS.get(command)
    if not handler:
        # No command, or a resource given without an action
        parser.print_help()
        return 1

    if settings is None:
        try:
            settings = Settings()
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors(include_url=False, include_input=False)
            )
            logger.error(f"Configuration error: invalid settings ({problems})")
            return 1

    return handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
