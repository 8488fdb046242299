"""
Ticket Store Interface
Async protocol the reconciler talks to. GitHubTicketStore is the production
implementation; tests pass AsyncMock objects with the same methods.
"""
from typing import List, Optional, Protocol

from lifeguard.models.ticket import TicketSearchResult, TicketState


class TicketStore(Protocol):
    async def search_tickets(self, query: str) -> TicketSearchResult:
        ...

    async def create_ticket(
        self, *, owner: str, repo: str, title: str, body: str, labels: List[str]
    ) -> None:
        ...

    async def update_ticket(
        self,
        *,
        owner: str,
        repo: str,
        number: int,
        body: str,
        state: Optional[TicketState] = None,
    ) -> None:
        ...
