"""
Version management for the admin CLI.

Version can be set via BUILD_VERSION environment variable (for release builds)
or read from the installed package metadata.
"""

import os
import logging
from importlib import metadata
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_VERSION = "0.1.0"
DISTRIBUTION_NAME = "openai-admin"


def _get_installed_version() -> Optional[str]:
    """
    Get version from the installed distribution metadata.

    Returns:
        Version string, or None if the package is not installed
    """
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        logger.debug(f"Distribution {DISTRIBUTION_NAME} is not installed")
        return None


def get_version() -> str:
    """
    Get application version.

    Priority order:
    1. BUILD_VERSION environment variable
    2. Installed package metadata
    3. DEFAULT_VERSION fallback

    Returns:
        Version string (e.g., "0.1.0")
    """
    build_version = os.getenv("BUILD_VERSION")
    if build_version:
        logger.debug(f"Using build version: {build_version}")
        return build_version

    installed_version = _get_installed_version()
    if installed_version:
        return installed_version

    logger.debug(f"Using default version: {DEFAULT_VERSION}")
    return DEFAULT_VERSION


__version__ = get_version()
