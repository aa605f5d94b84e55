"""
Normalization of key values returned by the admin API.

Create responses put the freshly issued secret under different field names
depending on the resource family. The accessors below are tried in order and
the first non-empty value wins.
"""

import logging
from typing import Callable, List, Optional, Tuple

from ..core.exceptions import MissingSecretValue
from ..schemas.common import SecretValueFields


logger = logging.getLogger(__name__)


ADMIN_KEY_PREFIX = "sk-admin"


SECRET_VALUE_ACCESSORS: List[Tuple[str, Callable[[SecretValueFields], Optional[str]]]] = [
    ("value", lambda response: response.value),
    ("token", lambda response: response.token),
    ("key", lambda response: response.key),
    ("api_key", lambda response: response.api_key),
]


def resolve_secret_value(
    response: SecretValueFields
) -> str:
    """
    Return the secret carried by a create response.

    Args:
        response: Decoded create response

    Returns:
        The first non-empty candidate, checked as value, token, key, api_key

    Raises:
        MissingSecretValue: If every candidate field is empty
    """
    for field_name, accessor in SECRET_VALUE_ACCESSORS:
        secret = accessor(response)
        if secret:
            logger.debug(f"Secret value found in '{field_name}' field")
            return secret

    expected = ", ".join(name for name, _ in SECRET_VALUE_ACCESSORS)
    raise MissingSecretValue(
        f"create response did not include a key value (expected one of: {expected})"
    )


def is_admin_variant(redacted_value: Optional[str]) -> bool:
    """Whether a redacted key follows the organization admin key prefix. Display only."""
    return bool(redacted_value) and redacted_value.startswith(ADMIN_KEY_PREFIX)
