"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    GITHUB_TOKEN        — Token used by GitHubTicketStore for the issues API
    GITHUB_API_URL      — REST API base URL (default: https://api.github.com)
    LIFEGUARD_TITLE     — Issue title suffix after the [fingerprint] prefix
    LIFEGUARD_BODY      — Text placed above the fenced error in new issues
    LIFEGUARD_LABELS    — Comma separated labels applied to new issues
    LIFEGUARD_REOPEN    — Reopen closed issues when the error comes back (default: false)
    LOG_LEVEL           — Root log level (default: INFO)
    LOG_DIR             — Directory for daily log files (default: console only)

These values only feed ReportOptions.from_config(). A ReportOptions built
directly in code keeps the library defaults from constants.py.
"""
import os
from dotenv import load_dotenv

from lifeguard.core.constants import DEFAULT_TITLE, DEFAULT_BODY

load_dotenv()

GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")

LIFEGUARD_TITLE = os.getenv("LIFEGUARD_TITLE", DEFAULT_TITLE)
LIFEGUARD_BODY = os.getenv("LIFEGUARD_BODY", DEFAULT_BODY)
LIFEGUARD_LABELS = [
    label.strip()
    for label in os.getenv("LIFEGUARD_LABELS", "").split(",")
    if label.strip()
]
LIFEGUARD_REOPEN = os.getenv("LIFEGUARD_REOPEN", "false").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "")
