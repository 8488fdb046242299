import uvicorn
import time
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from lifeguard.agents.bot_app import BotApp
from lifeguard.agents.guard import lifeguard
from lifeguard.api.webhook import create_webhook_router
from lifeguard.clients.github_client import GitHubTicketStore
from lifeguard.core.config import LOG_DIR, LOG_LEVEL
from lifeguard.models.event_context import EventContext
from lifeguard.models.report_options import ReportOptions
from lifeguard.utils.logging_config import setup_logging

setup_logging(level=LOG_LEVEL, log_dir=LOG_DIR or None)
logger = logging.getLogger("main")


# ---------------------------------------------------------------------------
# Bot handlers
# ---------------------------------------------------------------------------
async def on_issue_opened(context: EventContext):
    issue = context.payload["issue"]
    logger.info("Issue #%s opened: %s", issue["number"], issue["title"])
    return issue["number"]


def setup_bot(bot: BotApp) -> None:
    bot.on("issues.opened", on_issue_opened)


store = GitHubTicketStore()
guard = lifeguard(ReportOptions.from_config())
bot = guard.guard_app(setup_bot)(BotApp(github=store))


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await store.aclose()


app = FastAPI(title="Lifeguard Bot", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Logging Middleware
# ---------------------------------------------------------------------------
class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        logger.info(
            "%s %s - Status: %d - Time: %.2fms",
            request.method, request.url.path, response.status_code, process_time,
        )
        return response


app.add_middleware(LoggingMiddleware)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


app.include_router(create_webhook_router(bot))

if __name__ == "__main__":
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
