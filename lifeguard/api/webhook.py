"""
POST /webhook
Receives GitHub webhook deliveries and dispatches them to the bot app.
The event name is the X-GitHub-Event header, suffixed with ".<action>"
when the payload carries an action (e.g. "issues.opened").
"""
import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request

from lifeguard.agents.bot_app import BotApp

logger = logging.getLogger(__name__)


def event_name(header_event: str, payload: dict) -> str:
    action = payload.get("action")
    return f"{header_event}.{action}" if isinstance(action, str) and action else header_event


def create_webhook_router(bot_app: BotApp) -> APIRouter:
    router = APIRouter(tags=["Webhook"])

    @router.post("/webhook")
    async def receive_webhook(
        request: Request,
        x_github_event: Optional[str] = Header(default=None),
    ):
        if not x_github_event:
            raise HTTPException(status_code=400, detail="Missing X-GitHub-Event header")

        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON payload")
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Payload must be a JSON object")

        name = event_name(x_github_event, payload)
        logger.info("Webhook received: %s", name)
        try:
            await bot_app.receive(name, payload)
        except Exception as e:
            logger.error("Event '%s' failed: %s", name, e)
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok", "event": name}

    return router
