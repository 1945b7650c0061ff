import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.agent import AgentWrapper
from app.core.chat import MISSING_KEYS
from app.core.credentials import fingerprint
from app.main import create_app
from app.types import ApiKeys

from tests.conftest import SMART_WALLET_ADDRESS, FakeAgent, FakeToolkitFactory


def build_client(wallet_store, credential_dir, factory):
    wrapper = AgentWrapper(
        factory=factory,
        wallet_store=wallet_store,
        fallback_private_key="",
        credential_dir=str(credential_dir),
    )
    app = create_app(wrapper=wrapper, configure_logging=False)
    return app, TestClient(app)


@pytest.fixture
def balance_factory():
    return FakeToolkitFactory(agent=FakeAgent(replies=["Your ", "balance is 0 ETH."]))


@pytest.fixture
def api(wallet_store, credential_dir, balance_factory):
    return build_client(wallet_store, credential_dir, balance_factory)


def test_status_probe(api):
    _, client = api

    resp = client.get("/agent")

    assert resp.status_code == 200
    data = resp.json()
    assert "AgentKit API is running" in data["message"]
    assert "timestamp" in data


def test_reply_is_joined_from_chunks(api, api_keys_payload, balance_factory):
    _, client = api

    resp = client.post("/agent", json={"userMessage": "What's my balance?", "apiKeys": api_keys_payload})

    assert resp.status_code == 200
    assert resp.json() == {"response": "Your balance is 0 ETH."}
    assert len(balance_factory.builds) == 1


def test_empty_model_key_is_rejected_without_agent(api, api_keys_payload, balance_factory):
    _, client = api
    api_keys_payload["openaiKey"] = ""

    resp = client.post("/agent", json={"userMessage": "hi", "apiKeys": api_keys_payload})

    assert resp.status_code == 200
    data = resp.json()
    assert data["error"].startswith("API keys are required.")
    assert "openaiKey" in data["error"]
    assert data["kind"] == "input"
    assert "response" not in data
    assert balance_factory.builds == []
    assert balance_factory.agent.calls == []


@pytest.mark.parametrize("missing", ["openaiKey", "walletKeyId", "walletPrivateKey"])
def test_each_missing_field_is_named(api, api_keys_payload, balance_factory, missing):
    _, client = api
    del api_keys_payload[missing]

    data = client.post("/agent", json={"userMessage": "hi", "apiKeys": api_keys_payload}).json()

    assert missing in data["error"]
    assert balance_factory.builds == []


def test_missing_api_keys(api, balance_factory):
    _, client = api

    resp = client.post("/agent", json={"userMessage": "hi"})

    assert resp.status_code == 200
    assert resp.json() == {"error": MISSING_KEYS, "kind": "input"}
    assert balance_factory.builds == []


@pytest.mark.parametrize("body", [b"", b"not json", b"[1, 2]", b'{"apiKeys": "sk-test"}'])
def test_malformed_bodies_are_input_errors(api, balance_factory, body):
    _, client = api

    resp = client.post("/agent", content=body, headers={"Content-Type": "application/json"})

    assert resp.status_code == 200
    assert resp.json()["kind"] == "input"
    assert balance_factory.builds == []


def test_legacy_wallet_field_names(api, api_keys_payload):
    _, client = api
    legacy = {
        "openaiKey": api_keys_payload["openaiKey"],
        "cdpApiKeyName": api_keys_payload["walletKeyId"],
        "cdpPrivateKey": api_keys_payload["walletPrivateKey"],
        "networkId": "base-sepolia",
    }

    data = client.post("/agent", json={"userMessage": "hi", "apiKeys": legacy}).json()

    assert data == {"response": "Your balance is 0 ETH."}


def test_unsupported_network(api, api_keys_payload, balance_factory):
    _, client = api
    api_keys_payload["networkId"] = "solana-devnet"

    data = client.post("/agent", json={"userMessage": "hi", "apiKeys": api_keys_payload}).json()

    assert "Unsupported network" in data["error"]
    assert balance_factory.builds == []


def test_construction_failure_is_reported_and_not_cached(wallet_store, credential_dir, api_keys_payload):
    factory = FakeToolkitFactory(error=RuntimeError("invalid wallet API key"))
    app, client = build_client(wallet_store, credential_dir, factory)

    data = client.post("/agent", json={"userMessage": "hi", "apiKeys": api_keys_payload}).json()

    assert data["kind"] == "construction"
    assert "invalid wallet API key" in data["error"]
    assert app.state.session_cache.size() == 0
    assert list(credential_dir.iterdir()) == []


def test_invocation_failure_is_reported(wallet_store, credential_dir, api_keys_payload):
    factory = FakeToolkitFactory(agent=FakeAgent(replies=[], error=ConnectionError("rpc unavailable")))
    _, client = build_client(wallet_store, credential_dir, factory)

    resp = client.post("/agent", json={"userMessage": "hi", "apiKeys": api_keys_payload})

    assert resp.status_code == 200
    assert resp.json() == {"error": "rpc unavailable", "kind": "invocation"}


def test_known_wallet_without_key(wallet_store, credential_dir, api_keys_payload):
    wallet_store.path.write_text('{"walletAddress": "%s"}' % SMART_WALLET_ADDRESS)
    factory = FakeToolkitFactory()
    _, client = build_client(wallet_store, credential_dir, factory)

    data = client.post("/agent", json={"userMessage": "hi", "apiKeys": api_keys_payload}).json()

    assert data["kind"] == "construction"
    assert "provide the private key" in data["error"]
    assert "delete" in data["error"]
    assert factory.builds == []


def test_repeated_messages_reuse_agent(api, api_keys_payload, balance_factory):
    app, client = api

    for _ in range(3):
        client.post("/agent", json={"userMessage": "hi", "apiKeys": api_keys_payload})

    assert len(balance_factory.builds) == 1
    assert len(balance_factory.agent.calls) == 3
    assert app.state.session_cache.size() == 1


@pytest.mark.asyncio
async def test_concurrent_requests_share_one_agent(api, api_keys_payload, balance_factory):
    app, _ = api
    transport = httpx.ASGITransport(app=app)
    body = {"userMessage": "What's my balance?", "apiKeys": api_keys_payload}

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        responses = await asyncio.gather(client.post("/agent", json=body), client.post("/agent", json=body))

    assert [r.json() for r in responses] == [{"response": "Your balance is 0 ETH."}] * 2
    assert len(balance_factory.builds) == 1

    cache = app.state.session_cache
    credentials = ApiKeys.model_validate(api_keys_payload).to_credentials()
    assert cache.size() == 1
    assert (await cache.store.get(fingerprint(credentials))) is not None


def test_health_reports_cached_agents(api, api_keys_payload):
    _, client = api
    assert client.get("/healthz").json()["cached_agents"] == 0

    client.post("/agent", json={"userMessage": "hi", "apiKeys": api_keys_payload})

    data = client.get("/healthz").json()
    assert data["status"] == "healthy"
    assert data["cached_agents"] == 1


def test_request_id_header(api):
    _, client = api

    resp = client.get("/agent", headers={"x-request-id": "abc123"})

    assert resp.headers["x-request-id"] == "abc123"
