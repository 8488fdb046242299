"""
Loop Guard
==========
Stops the reporter from reacting to its own issues.

Example: an app listens to issues.opened, crashes, and lifeguard opens an
issue for the crash. GitHub then delivers issues.opened for that new issue,
the app crashes again, and so on. When the triggering event's issue carries
exactly the title we would report under, the report is skipped.
"""
import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def should_skip(payload: Optional[Mapping[str, Any]], title: str) -> bool:
    """
    Return True when the triggering event concerns the report issue itself.

    Parameters
    ----------
    payload : Mapping or None
        Raw webhook payload of the event that caused the failure.
    title : str
        Title the report would be filed under ("[<code>] <title>").
    """
    if not payload:
        return False
    issue = payload.get("issue")
    if not isinstance(issue, Mapping):
        return False
    if issue.get("title") == title:
        logger.info("Event was triggered by report issue '%s', not reporting", title)
        return True
    return False
