"""
GitHub Ticket Store
===================
Thin httpx client for the GitHub issues API, implementing TicketStore.

Endpoints:
    search  — GET   /search/issues?q=<query>
    create  — POST  /repos/{owner}/{repo}/issues
    update  — PATCH /repos/{owner}/{repo}/issues/{number}

Every response is checked with raise_for_status(). HTTP and transport
errors propagate as httpx exceptions; nothing is retried here.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from lifeguard.core.config import GITHUB_API_URL, GITHUB_TOKEN
from lifeguard.models.ticket import TicketSearchResult, TicketState

logger = logging.getLogger(__name__)


class GitHubTicketStore:
    """
    Ticket store backed by GitHub issues.
    """

    def __init__(
        self,
        github_token: str = GITHUB_TOKEN,
        base_url: str = GITHUB_API_URL,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 20.0,
    ) -> None:
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "lifeguard-error-reporter",
        }
        if github_token:
            self.headers["Authorization"] = f"token {github_token}"
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(
            method, f"{self.base_url}{path}", headers=self.headers, **kwargs
        )
        response.raise_for_status()
        return response

    async def search_tickets(self, query: str) -> TicketSearchResult:
        response = await self._request("GET", "/search/issues", params={"q": query})
        result = TicketSearchResult.model_validate(response.json())
        logger.debug("Search '%s' returned %d issue(s)", query, len(result.items))
        return result

    async def create_ticket(
        self, *, owner: str, repo: str, title: str, body: str, labels: List[str]
    ) -> None:
        await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues",
            json={"title": title, "body": body, "labels": list(labels)},
        )

    async def update_ticket(
        self,
        *,
        owner: str,
        repo: str,
        number: int,
        body: str,
        state: Optional[TicketState] = None,
    ) -> None:
        data: Dict[str, Any] = {"body": body}
        if state is not None:
            data["state"] = state
        await self._request("PATCH", f"/repos/{owner}/{repo}/issues/{number}", json=data)

    async def aclose(self) -> None:
        await self._client.aclose()
