"""Stock technical/fundamental scoring and playbook engine."""

import os


def get_server_version() -> str:
    """Get version with fallback for dev mode."""
    if version := os.environ.get("SERVER_VERSION"):
        return version
    try:
        from importlib.metadata import version as pkg_version

        return pkg_version("stock-playbook")
    except Exception:
        return "dev"


SERVER_VERSION = get_server_version()
# Bump when output schema changes materially (new fields, renamed fields, structure changes)
# v1: Technical/fundamental scores, valuation snapshot, three horizon scenarios
# v2: Added triggered_rules and degraded-indicator warnings
SCHEMA_VERSION = "2"
