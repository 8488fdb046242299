"""
Lifeguard
=========
Wraps bot event handlers so that any failure is reported as a GitHub issue
and then re-raised unchanged.

Two entry points:
    guard_handler(handler)  — guard a single handler
    guard_app(setup)        — guard every handler the setup function
                              registers through app.on()

Receiver binding:
    The wrapper forwards all positional and keyword arguments as received.
    Bound methods keep their receiver, and a guarded function used as a
    decorator in a class body still binds ``self`` like any other method.

Failure handling:
    The handler's exception is always what the caller sees. Errors raised
    while reporting (search/create/update) are logged and dropped.
"""
import inspect
import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional, Tuple

from lifeguard.models.event_context import EventContext
from lifeguard.models.report_options import ReportOptions
from lifeguard.services.reconciler import report_error

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


def _find_context(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Optional[EventContext]:
    for arg in args:
        if isinstance(arg, EventContext):
            return arg
    context = kwargs.get("context")
    return context if isinstance(context, EventContext) else None


class Lifeguard:
    """
    Error reporter bound to one set of ReportOptions.
    """

    def __init__(self, options: Optional[ReportOptions] = None) -> None:
        self.options = options or ReportOptions()

    async def invoke_handler(
        self,
        handler: Handler,
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
    ) -> Any:
        """
        Call a handler and report its failure, if any.

        Sync handlers are called directly; awaitable results (coroutine
        handlers) are awaited. The handler's return value is passed through.
        """
        try:
            result = handler(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as err:
            await self._report(err, args, kwargs)
            # Let the host app see and log the original failure
            raise

    async def _report(self, err: Exception, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        context = _find_context(args, kwargs)
        if context is None:
            logger.warning("Handler failed without an EventContext argument, not reporting: %s", err)
            return
        try:
            await report_error(context, err, self.options)
        except Exception:
            logger.exception("Failed to report error for event '%s'", context.name)

    def guard_handler(self, handler: Handler) -> Handler:
        """Return an async wrapper of ``handler`` that reports its failures."""
        guard = self

        @wraps(handler)
        async def guarded(*args, **kwargs):
            return await guard.invoke_handler(handler, args, kwargs)

        return guarded

    def guard_app(self, setup: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """
        Wrap an app setup function so every handler it registers is guarded.

        The returned ``install(app)`` replaces ``app.on`` with a version that
        guards each handler before handing it to the original, then runs
        ``setup(app)``.
        """
        guard = self

        def install(app):
            original_on = app.on

            def on(event, handler):
                return original_on(event, guard.guard_handler(handler))

            app.on = on
            setup(app)
            return app

        return install


def lifeguard(options: Optional[ReportOptions] = None, **overrides: Any) -> Lifeguard:
    """
    Create a Lifeguard.

    Usage:
        guard = lifeguard(reopen=True, labels=["bot-error"])
        guard = lifeguard(ReportOptions.from_config())
    """
    if options is None:
        options = ReportOptions(**overrides)
    elif overrides:
        options = ReportOptions(**{**options.model_dump(), **overrides})
    return Lifeguard(options)
