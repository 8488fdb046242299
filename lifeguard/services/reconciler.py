"""
Issue Reconciler
================
Decides what to do with a fingerprinted failure and writes it to the
ticket store.

Per fingerprint, across reports:
    no issue                      → create, Occurrences: 1
    open (N)                      → update, Occurrences: N+1, stays open
    closed (N), reopen disabled   → update, Occurrences: N+1, stays closed
    closed (N), reopen enabled    → update, Occurrences: N+1, reopened

Only the first search result is trusted. The query sorts by most recent
update, so if two issues ever share a fingerprint the most recently touched
one wins. Nothing else resolves collisions.

Concurrency:
    Two concurrent failures with the same fingerprint can both see "no match"
    and both create an issue. No locking is done here.

Errors:
    Ticket store errors propagate unchanged and are not retried. The
    Lifeguard wrapper isolates them from the handler failure.
"""
import logging
import re
from typing import Any, Dict, Literal, Mapping, Optional

from lifeguard.clients.ticket_store import TicketStore
from lifeguard.core.constants import OCCURRENCES_LABEL
from lifeguard.models.event_context import EventContext
from lifeguard.models.report_options import ReportOptions
from lifeguard.models.ticket import Ticket, TicketState
from lifeguard.services.loop_guard import should_skip
from lifeguard.services.query_builder import build_search_query
from lifeguard.utils.error_fingerprint import canonicalize, fingerprint, report_title

logger = logging.getLogger(__name__)

ReconcileOutcome = Literal["skipped", "created", "updated", "reopened"]

_OCCURRENCES_RE = re.compile(r"(Occurrences:\s*)(\d+)")


def build_issue_body(error_text: str, options: ReportOptions) -> str:
    """Body of a newly created report issue."""
    return "\n\n".join([
        options.body,
        "```\n" + error_text + "\n```",
        f"{OCCURRENCES_LABEL} 1",
    ])


def increment_occurrences(body: str) -> str:
    """
    Bump the first ``Occurrences: <N>`` counter in an issue body.

    A body without a counter is returned unchanged; no counter is inserted.
    """
    return _OCCURRENCES_RE.sub(
        lambda match: match.group(1) + str(int(match.group(2)) + 1),
        body,
        count=1,
    )


def resolve_state(ticket: Ticket, reopen: bool) -> TicketState:
    """Closed issues are reopened only when reopen is enabled."""
    if ticket.state == "closed" and reopen:
        return "open"
    return ticket.state


class IssueReconciler:
    """
    Create-or-update decision engine for one guarded app.
    """

    def __init__(self, store: TicketStore, options: ReportOptions) -> None:
        self.store = store
        self.options = options

    async def reconcile(
        self,
        owner: str,
        repo: str,
        error_code: str,
        error_text: str,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> ReconcileOutcome:
        """
        File or update the report issue for one failure.

        Parameters
        ----------
        owner, repo : str
            Repository the issue lives in.
        error_code : str
            Fingerprint of ``error_text``.
        error_text : str
            Canonical error text, fenced into new issue bodies.
        payload : Mapping, optional
            Triggering event payload, checked by the loop guard.

        Returns
        -------
        ReconcileOutcome
            What was done: skipped, created, updated or reopened.
        """
        title = report_title(error_code, self.options)

        if should_skip(payload, title):
            return "skipped"

        query = build_search_query(error_code, self.options)
        result = await self.store.search_tickets(query)
        match = result.items[0] if result.items else None

        if match is None:
            await self.store.create_ticket(
                owner=owner,
                repo=repo,
                title=title,
                body=build_issue_body(error_text, self.options),
                labels=list(self.options.labels),
            )
            logger.info("Created issue '%s' in %s/%s", title, owner, repo)
            return "created"

        state = resolve_state(match, self.options.reopen)
        await self.store.update_ticket(
            owner=owner,
            repo=repo,
            number=match.number,
            body=increment_occurrences(match.body),
            state=state,
        )
        if state != match.state:
            logger.info("Reopened issue #%d for error %s in %s/%s", match.number, error_code, owner, repo)
            return "reopened"
        logger.info("Updated issue #%d for error %s in %s/%s", match.number, error_code, owner, repo)
        return "updated"


async def report_error(
    context: EventContext,
    failure: Any,
    options: ReportOptions,
) -> ReconcileOutcome:
    """
    Run the full reporting pipeline for a failure raised by a handler.

    Canonicalizes and fingerprints the failure, then reconciles it against
    the context's ticket store in the context's repository.
    """
    if context.github is None:
        raise ValueError(f"Event '{context.name}' has no ticket store client")

    coords: Dict[str, str] = context.repo()
    error_text = canonicalize(failure)
    error_code = fingerprint(error_text)

    reconciler = IssueReconciler(context.github, options)
    return await reconciler.reconcile(
        coords["owner"],
        coords["repo"],
        error_code,
        error_text,
        payload=context.payload,
    )
