"""
Webhook Endpoint Tests
======================
POST /webhook dispatch, event naming and error mapping.
Ticket store is mocked — no real GitHub calls.
"""
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from lifeguard.agents.bot_app import BotApp
from lifeguard.agents.guard import lifeguard
from lifeguard.api.webhook import create_webhook_router, event_name
from lifeguard.models.ticket import TicketSearchResult

PAYLOAD = {
    "action": "opened",
    "issue": {"number": 42, "title": "Something broke"},
    "repository": {"owner": {"login": "foo"}, "name": "bar"},
}


def _client(bot: BotApp) -> TestClient:
    app = FastAPI()
    app.include_router(create_webhook_router(bot))
    return TestClient(app)


def _store():
    store = MagicMock()
    store.search_tickets = AsyncMock(return_value=TicketSearchResult(items=[]))
    store.create_ticket = AsyncMock()
    store.update_ticket = AsyncMock()
    return store


def test_event_name():
    assert event_name("issues", {"action": "opened"}) == "issues.opened"
    assert event_name("push", {"ref": "refs/heads/main"}) == "push"


def test_webhook_dispatches_event():
    bot = BotApp(github=_store())
    seen = []
    bot.on("issues.opened", lambda context: seen.append(context.payload["issue"]["number"]))

    resp = _client(bot).post("/webhook", json=PAYLOAD, headers={"X-GitHub-Event": "issues"})

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "event": "issues.opened"}
    assert seen == [42]


def test_webhook_requires_event_header():
    resp = _client(BotApp()).post("/webhook", json=PAYLOAD)
    assert resp.status_code == 400


def test_webhook_rejects_non_object_payload():
    resp = _client(BotApp()).post("/webhook", json=[1, 2], headers={"X-GitHub-Event": "push"})
    assert resp.status_code == 400


def test_webhook_rejects_malformed_json():
    resp = _client(BotApp()).post(
        "/webhook",
        content=b"{not json",
        headers={"X-GitHub-Event": "push", "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid JSON payload"


def test_guarded_failure_reports_issue_and_returns_500():
    store = _store()

    def broken(context):
        raise RuntimeError("handler exploded")

    bot = lifeguard().guard_app(lambda app: app.on("issues", broken))(BotApp(github=store))

    resp = _client(bot).post("/webhook", json=PAYLOAD, headers={"X-GitHub-Event": "issues"})

    assert resp.status_code == 500
    assert resp.json()["detail"] == "handler exploded"
    store.create_ticket.assert_awaited_once()
    assert store.create_ticket.await_args.kwargs["owner"] == "foo"
    assert store.create_ticket.await_args.kwargs["repo"] == "bar"
