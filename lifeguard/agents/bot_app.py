"""
Bot App
=======
Minimal event-driven bot host: handlers register for webhook events with
on(), and receive() dispatches a delivery to every matching handler.

Event matching:
    "*"               — every event
    "issues"          — "issues" and any "issues.<action>"
    "issues.opened"   — only that action
"""
import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from lifeguard.clients.ticket_store import TicketStore
from lifeguard.models.event_context import EventContext

logger = logging.getLogger(__name__)

Handler = Callable[[EventContext], Any]


def event_matches(registered: str, name: str) -> bool:
    if registered == "*" or registered == name:
        return True
    return "." not in registered and name.startswith(registered + ".")


class BotApp:
    """
    Registry and dispatcher for bot event handlers.
    """

    def __init__(self, github: Optional[TicketStore] = None) -> None:
        self.github = github
        self._handlers: List[Tuple[str, Handler]] = []

    def on(self, event: Union[str, List[str]], handler: Handler) -> None:
        """Register ``handler`` for one event name or a list of them."""
        events = [event] if isinstance(event, str) else list(event)
        for name in events:
            self._handlers.append((name, handler))
            logger.debug("Registered handler %s for '%s'", getattr(handler, "__name__", handler), name)

    def handlers_for(self, name: str) -> List[Handler]:
        return [handler for registered, handler in self._handlers if event_matches(registered, name)]

    async def receive(self, name: str, payload: Optional[Dict[str, Any]] = None) -> List[Any]:
        """
        Dispatch one event to every matching handler.

        Handlers run concurrently. Each failure is logged; after all handlers
        finish, the first failure is re-raised.

        Returns
        -------
        list
            Handler results in registration order.
        """
        context = EventContext(name=name, payload=payload or {}, github=self.github)
        handlers = self.handlers_for(name)
        if not handlers:
            logger.debug("No handlers for event '%s'", name)
            return []

        results = await asyncio.gather(
            *(self._run(handler, context) for handler in handlers),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        for err in errors:
            logger.error("Handler failed for event '%s': %s", name, err)
        if errors:
            raise errors[0]
        return list(results)

    @staticmethod
    async def _run(handler: Handler, context: EventContext) -> Any:
        result = handler(context)
        if inspect.isawaitable(result):
            result = await result
        return result
