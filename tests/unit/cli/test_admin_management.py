"""
Unit tests for openai_admin/cli/admin_management.py

Tests the command handlers end to end with a mocked AdminClient:
- Table and JSON-lines output for list commands
- Partial output when a later page fails
- Create, delete and project ID resolution
- Exit codes
"""

import json
import logging
from unittest.mock import patch

import pytest

from openai_admin.cli.admin_management import build_parser, main
from openai_admin.core.config import Settings
from openai_admin.core.exceptions import TransportError

logger = logging.getLogger(__name__)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def mock_client_class():
    """Patch the AdminClient used by the CLI."""
    with patch("openai_admin.cli.admin_management.AdminClient") as client_class:
        yield client_class


@pytest.fixture
def mock_client_instance(mock_client_class):
    """The AdminClient instance handed to the handlers."""
    return mock_client_class.return_value


def _stdout_lines(capsys):
    return capsys.readouterr().out.splitlines()


# =============================================================================
# PARSER
# =============================================================================


@pytest.mark.unit
@pytest.mark.cli
class TestBuildParser:
    """Tests for build_parser."""

    def test_project_id_before_action(self):
        """Test --project-id on the api-keys group."""
        args = build_parser().parse_args(["projects", "api-keys", "--project-id", "proj_1", "list"])

        assert args.project_id == "proj_1"
        assert args.key_action == "list"

    def test_project_id_after_action(self):
        """Test --project-id on the action itself."""
        args = build_parser().parse_args(["projects", "api-keys", "delete", "key_1", "--project-id", "proj_2"])

        assert args.project_id == "proj_2"
        assert args.key_id == "key_1"

    def test_project_id_defaults_to_none(self):
        """Test that no --project-id leaves the value unset."""
        args = build_parser().parse_args(["projects", "api-keys", "list"])

        assert args.project_id is None


@pytest.mark.unit
@pytest.mark.cli
class TestMainDispatch:
    """Tests for main() dispatch and exit codes."""

    def test_no_command_prints_help(self, test_settings, capsys):
        """Test that running without a command fails with help."""
        assert main([], settings=test_settings) == 1
        assert "usage:" in capsys.readouterr().out

    def test_resource_without_action_prints_help(self, test_settings, capsys):
        """Test that a resource without an action fails with help."""
        assert main(["admin-keys"], settings=test_settings) == 1

    def test_missing_api_key_fails_before_request(self, mock_client_class):
        """Test that no credentials means no client and exit code 1."""
        exit_code = main(["organizations", "list"], settings=Settings(_env_file=None))

        assert exit_code == 1
        mock_client_class.assert_not_called()

    def test_client_built_from_flags(self, mock_client_class, mock_client_instance, page_payload, test_settings):
        """Test that global flags override settings when building the client."""
        mock_client_instance.get.return_value = page_payload([], has_more=False)

        main(
            ["--api-key", "sk-admin-flag", "--base-url", "http://localhost:8080/v1", "organizations", "list"],
            settings=test_settings,
        )

        mock_client_class.assert_called_once_with(
            api_key="sk-admin-flag",
            base_url="http://localhost:8080/v1",
            organization=None,
            timeout=30
        )


# =============================================================================
# LIST COMMANDS
# =============================================================================


@pytest.mark.unit
@pytest.mark.cli
class TestListCommands:
    """Tests for the list handlers."""

    def test_admin_keys_list_table(self, mock_client_instance, page_payload, sample_admin_key, test_settings, capsys):
        """Test the admin key table across two pages."""
        second_key = {"id": "key_def", "name": "old", "redacted_value": "sk-abc", "created_at": 0}
        mock_client_instance.get.side_effect = [
            page_payload([sample_admin_key], has_more=True),
            page_payload([second_key], has_more=False),
        ]

        exit_code = main(["admin-keys", "list"], settings=test_settings)

        assert exit_code == 0
        lines = _stdout_lines(capsys)
        assert lines[0].split() == [
            "ID", "NAME", "IS_ADMIN", "CREATED_AT", "LAST_USED_AT", "OWNER_TYPE", "OWNER_ROLE", "OWNER_NAME",
        ]
        assert lines[1].split() == ["key_abc", "ci-bot", "true", "2024-05-01T12:00:00Z", "user", "owner", "Ada"]
        assert lines[2].split() == ["key_def", "old", "false"]
        assert mock_client_instance.get.call_args_list[1].kwargs["params"]["after"] == "key_abc"

    def test_list_limit_is_clamped(self, mock_client_instance, page_payload, test_settings):
        """Test that an out-of-range --limit becomes 100."""
        mock_client_instance.get.return_value = page_payload([], has_more=False)

        main(["organizations", "list", "--limit", "500"], settings=test_settings)

        assert mock_client_instance.get.call_args.kwargs["params"] == {"limit": 100}

    def test_projects_list_include_archived(self, mock_client_instance, page_payload, test_settings):
        """Test that --include-archived is sent as a query flag."""
        mock_client_instance.get.return_value = page_payload([], has_more=False)

        main(["projects", "list", "--include-archived", "--limit", "20"], settings=test_settings)

        mock_client_instance.get.assert_called_once_with(
            "/organization/projects",
            params={"include_archived": "true", "limit": 20},
        )

    def test_projects_list_excludes_archived_by_default(self, mock_client_instance, page_payload, test_settings):
        """Test that include_archived defaults to false."""
        mock_client_instance.get.return_value = page_payload([], has_more=False)

        main(["projects", "list"], settings=test_settings)

        assert mock_client_instance.get.call_args.kwargs["params"]["include_archived"] == "false"

    def test_json_output(self, mock_client_instance, page_payload, test_settings, capsys):
        """Test one JSON object per record with --json."""
        mock_client_instance.get.return_value = page_payload(
            [{"id": "org_1", "name": "acme", "parent_org_id": None}, {"id": "org_2"}],
            has_more=False,
        )

        exit_code = main(["organizations", "list", "--json"], settings=test_settings)

        assert exit_code == 0
        records = [json.loads(line) for line in _stdout_lines(capsys)]
        assert records == [{"id": "org_1", "name": "acme"}, {"id": "org_2"}]

    def test_partial_output_kept_on_failure(self, mock_client_instance, page_payload, test_settings, capsys):
        """Test that rows from pages before a failure are still printed."""
        mock_client_instance.get.side_effect = [
            page_payload([{"id": "proj_1", "name": "one", "status": "active"}], has_more=True),
            TransportError("HTTP 500", status_code=500),
        ]

        exit_code = main(["projects", "list"], settings=test_settings)

        assert exit_code == 1
        lines = _stdout_lines(capsys)
        assert lines[0].split() == ["ID", "NAME", "STATUS", "CREATED_AT", "ARCHIVED_AT"]
        assert lines[1].split() == ["proj_1", "one", "active"]


# =============================================================================
# ADMIN KEY MUTATIONS
# =============================================================================


@pytest.mark.unit
@pytest.mark.cli
class TestAdminKeyMutations:
    """Tests for admin key create and delete."""

    def test_create_prints_only_secret(self, mock_client_instance, sample_admin_key, test_settings, capsys):
        """Test that create prints the secret and nothing else on stdout."""
        mock_client_instance.post.return_value = dict(sample_admin_key, token="sk-admin-new-secret")

        exit_code = main(["admin-keys", "create", "--name", "ci-bot"], settings=test_settings)

        assert exit_code == 0
        assert capsys.readouterr().out == "sk-admin-new-secret\n"

    def test_create_requires_name(self, mock_client_class, test_settings):
        """Test that create without --name fails before any request."""
        exit_code = main(["admin-keys", "create"], settings=test_settings)

        assert exit_code == 1
        mock_client_class.assert_not_called()

    def test_create_without_secret_fails(self, mock_client_instance, test_settings, capsys):
        """Test that a missing secret is an error, not a blank line."""
        mock_client_instance.post.return_value = {"id": "key_abc", "name": "ci-bot"}

        exit_code = main(["admin-keys", "create", "--name", "ci-bot"], settings=test_settings)

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    def test_delete_echoes_key_id(self, mock_client_instance, test_settings, capsys):
        """Test that the input ID is reported when the response omits it."""
        mock_client_instance.delete.return_value = {"deleted": True}

        exit_code = main(["admin-keys", "delete", "key_abc"], settings=test_settings)

        assert exit_code == 0
        assert capsys.readouterr().out == "DELETED\ttrue\tkey_abc\n"
        mock_client_instance.delete.assert_called_once_with("/organization/admin_api_keys/key_abc")

    def test_delete_failure_exit_code(self, mock_client_instance, test_settings):
        """Test that a failed delete returns 1."""
        mock_client_instance.delete.side_effect = TransportError("HTTP 404", status_code=404)

        assert main(["admin-keys", "delete", "key_missing"], settings=test_settings) == 1


# =============================================================================
# PROJECT API KEYS
# =============================================================================


@pytest.mark.unit
@pytest.mark.cli
class TestProjectApiKeyCommands:
    """Tests for project API key commands and project ID resolution."""

    def test_missing_project_id_fails_before_request(self, mock_client_class, test_settings):
        """Test that no flag and no environment value halts early."""
        exit_code = main(["projects", "api-keys", "list"], settings=test_settings)

        assert exit_code == 1
        mock_client_class.assert_not_called()

    def test_project_id_from_settings(self, mock_client_instance, page_payload):
        """Test that OPENAI_PROJECT_ID is used without a flag."""
        settings = Settings(_env_file=None, openai_admin_key="sk-admin-test-key", openai_project_id="proj_env")
        mock_client_instance.get.return_value = page_payload([], has_more=False)

        exit_code = main(["projects", "api-keys", "list"], settings=settings)

        assert exit_code == 0
        assert mock_client_instance.get.call_args.args == ("/organization/projects/proj_env/api_keys",)

    def test_project_id_flag_wins(self, mock_client_instance, page_payload):
        """Test that --project-id overrides OPENAI_PROJECT_ID."""
        settings = Settings(_env_file=None, openai_admin_key="sk-admin-test-key", openai_project_id="proj_env")
        mock_client_instance.get.return_value = page_payload([], has_more=False)

        main(["projects", "api-keys", "--project-id", "proj_flag", "list"], settings=settings)

        assert mock_client_instance.get.call_args.args == ("/organization/projects/proj_flag/api_keys",)

    def test_list_table(self, mock_client_instance, page_payload, test_settings, capsys):
        """Test the project API key table."""
        mock_client_instance.get.return_value = page_payload(
            [{"id": "key_p1", "name": "svc", "redacted_value": "sk-proj-abc", "created_at": 1714564800}],
            has_more=False,
        )

        exit_code = main(["projects", "api-keys", "list", "--project-id", "proj_1"], settings=test_settings)

        assert exit_code == 0
        lines = _stdout_lines(capsys)
        assert lines[0].split() == ["ID", "NAME", "CREATED_AT", "LAST_USED_AT", "REDACTED_VALUE"]
        assert lines[1].split() == ["key_p1", "svc", "2024-05-01T12:00:00Z", "sk-proj-abc"]

    def test_create_prints_secret(self, mock_client_instance, test_settings, capsys):
        """Test project key creation."""
        mock_client_instance.post.return_value = {"id": "key_p2", "value": "sk-proj-new"}

        exit_code = main(
            ["projects", "api-keys", "--project-id", "proj_1", "create", "--name", "svc"],
            settings=test_settings,
        )

        assert exit_code == 0
        assert capsys.readouterr().out == "sk-proj-new\n"
        mock_client_instance.post.assert_called_once_with(
            "/organization/projects/proj_1/api_keys",
            body={"name": "svc"},
        )

    def test_delete_echoes_key_id(self, mock_client_instance, test_settings, capsys):
        """Test project key deletion output."""
        mock_client_instance.delete.return_value = {"object": "organization.project.api_key.deleted", "deleted": True}

        exit_code = main(
            ["projects", "api-keys", "--project-id", "proj_1", "delete", "key_p1"],
            settings=test_settings,
        )

        assert exit_code == 0
        assert capsys.readouterr().out == "DELETED\ttrue\tkey_p1\n"


# =============================================================================
# SECRET HANDLING AND ROBUSTNESS
# =============================================================================


@pytest.mark.unit
@pytest.mark.cli
class TestCreateSecretHandling:
    """Tests that issued secrets reach stdout once and never the logs."""

    def test_create_without_id_prints_secret(self, mock_client_instance, test_settings, capsys, caplog):
        """Test that a create response lacking id still prints the secret."""
        mock_client_instance.post.return_value = {
            "object": "organization.admin_api_key",
            "name": "ci",
            "value": "sk-admin-SUPERSECRET",
        }

        with caplog.at_level(logging.DEBUG):
            exit_code = main(["admin-keys", "create", "--name", "ci"], settings=test_settings)

        assert exit_code == 0
        assert capsys.readouterr().out == "sk-admin-SUPERSECRET\n"
        assert all("SUPERSECRET" not in record.getMessage() for record in caplog.records)

    def test_malformed_create_response_does_not_log_secret(self, mock_client_instance, test_settings, capsys, caplog):
        """Test that a decode failure on create keeps the secret out of every log record."""
        mock_client_instance.post.return_value = {
            "id": "key_abc",
            "owner": "not-an-object",
            "value": "sk-admin-SUPERSECRET",
        }

        with caplog.at_level(logging.DEBUG):
            exit_code = main(["admin-keys", "create", "--name", "ci"], settings=test_settings)

        assert exit_code == 1
        assert capsys.readouterr().out == ""
        assert any(record.levelno == logging.ERROR for record in caplog.records)
        assert all("SUPERSECRET" not in record.getMessage() for record in caplog.records)


@pytest.mark.unit
@pytest.mark.cli
class TestRobustness:
    """Tests for inputs that must not escape main() as tracebacks."""

    def test_millisecond_timestamp_in_list(self, mock_client_instance, page_payload, test_settings, capsys):
        """Test that an out-of-range created_at renders instead of crashing."""
        mock_client_instance.get.return_value = page_payload(
            [{"id": "proj_1", "name": "one", "status": "active", "created_at": 10**12}],
            has_more=False,
        )

        exit_code = main(["projects", "list"], settings=test_settings)

        assert exit_code == 0
        lines = _stdout_lines(capsys)
        assert lines[1].split() == ["proj_1", "one", "active", str(10**12)]

    def test_invalid_settings_exit_code(self, monkeypatch, mock_client_class, caplog):
        """Test that a malformed environment value exits 1 without a request."""
        monkeypatch.setenv("OPENAI_ADMIN_KEY", "sk-admin-test-key")
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "lots")

        exit_code = main(["organizations", "list"])

        assert exit_code == 1
        mock_client_class.assert_not_called()
        assert "default_page_size" in caplog.text
