"""Release check and self-upgrade."""

from __future__ import annotations

import logging
import subprocess
import sys

import httpx

from ghworkspace import __version__

logger = logging.getLogger(__name__)

PACKAGE_NAME = "ghworkspace"
PYPI_URL = f"https://pypi.org/pypi/{PACKAGE_NAME}/json"


async def fetch_latest_version(client: httpx.AsyncClient | None = None) -> str:
    """Get the most recent released version from PyPI."""
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=10.0)
    try:
        response = await client.get(PYPI_URL)
        response.raise_for_status()
        return str(response.json()["info"]["version"]).strip()
    finally:
        if owns_client:
            await client.aclose()


async def check_for_updates(client: httpx.AsyncClient | None = None) -> bool:
    """True when a release other than the installed one is published.

    Network or payload problems are logged and reported as "no update".
    """
    try:
        latest = await fetch_latest_version(client)
    except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Failed to check for updates: {e}")
        return False
    return bool(latest) and latest != __version__


def upgrade_command() -> list[str]:
    return [sys.executable, "-m", "pip", "install", "--upgrade", PACKAGE_NAME]


def run_upgrade() -> int:
    """Upgrade the installed package in place, returning pip's exit code."""
    result = subprocess.run(upgrade_command())
    return result.returncode
