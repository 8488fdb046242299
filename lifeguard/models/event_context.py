"""
Event Context
=============
Invocation context handed to every bot handler: the event name, the raw
webhook payload and the ticket store client used for reporting.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from lifeguard.clients.ticket_store import TicketStore


@dataclass
class EventContext:
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    github: Optional[TicketStore] = None

    def repo(self) -> Dict[str, str]:
        """Return the owner/repo coordinates of the repository that sent the event."""
        repository = self.payload.get("repository")
        if not isinstance(repository, dict):
            raise ValueError(f"Event '{self.name}' has no repository in its payload")
        owner = repository.get("owner") or {}
        return {"owner": owner.get("login", ""), "repo": repository.get("name", "")}

    @property
    def issue(self) -> Optional[Dict[str, Any]]:
        issue = self.payload.get("issue")
        return issue if isinstance(issue, dict) else None
