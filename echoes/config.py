"""
Configuration management for echoes.

Loads history service settings from environment variables.
"""

import os
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

ABACUS_API_URL = os.getenv(
    "ABACUS_API_URL", "https://apis.evanpurkhiser.com/atuin-abacus"
)
ABACUS_TIMEZONE = os.getenv("ABACUS_TIMEZONE", "America/New_York")
ABACUS_TIMEOUT = os.getenv("ABACUS_TIMEOUT", "10")


def get_timeout() -> float:
    """Return the request timeout in seconds."""
    return float(ABACUS_TIMEOUT)


def validate_config():
    """Validate that the history service configuration is usable."""
    problems = []

    if not ABACUS_API_URL or not ABACUS_API_URL.startswith(("http://", "https://")):
        problems.append("ABACUS_API_URL must be an http(s) URL")

    if not ABACUS_TIMEZONE:
        problems.append("ABACUS_TIMEZONE must name a timezone, e.g. America/New_York")

    try:
        if float(ABACUS_TIMEOUT) <= 0:
            problems.append("ABACUS_TIMEOUT must be a positive number of seconds")
    except (TypeError, ValueError):
        problems.append("ABACUS_TIMEOUT must be a positive number of seconds")

    if problems:
        raise ValueError(
            f"Invalid configuration: {'; '.join(problems)}\n"
            "Please copy .env.example to .env and fill in your values."
        )
