"""HTTP API coverage using FastAPI's TestClient."""

import base64

import pytest
from fastapi.testclient import TestClient

from campus_app.app import CampusStyleApp
from campus_app.config import AppConfig
from campus_app.errors import RemoteModelError
from evaluation.scenarios import sample_plan_json
from models.shopping import SearchReply, WebCitation
from models.taxonomy import WEEKDAYS
from server.api import create_app
from tools.model_client import MockModelClient

MON_FRI = list(WEEKDAYS[:5])


@pytest.fixture()
def model_client() -> MockModelClient:
    reply = SearchReply(text="", citations=[WebCitation(title="Hoodie", uri="https://shop.example/hoodie")])
    return MockModelClient(plan_text=sample_plan_json(MON_FRI), search_reply=reply)


@pytest.fixture()
def client(model_client: MockModelClient) -> TestClient:
    style_app = CampusStyleApp(config=AppConfig(api_key="test-key"), client=model_client)
    return TestClient(create_app(style_app))


def _session(client: TestClient) -> str:
    return client.post("/sessions").json()["session_id"]


def test_healthcheck(client: TestClient) -> None:
    body = client.get("/healthz").json()

    assert body["status"] == "ok"
    assert body["environment"] == "local"


def test_generate_edit_and_reset(client: TestClient) -> None:
    session_id = _session(client)

    response = client.post(
        f"/sessions/{session_id}/plan",
        json={"gender": "Female", "collegeDays": ["Friday", "Monday"], "season": "Spring"},
    )
    assert response.status_code == 200
    plan = response.json()["plan"]
    assert [entry["day"] for entry in plan] == [day.value for day in WEEKDAYS]

    added = client.post(f"/sessions/{session_id}/days/0/items", json={"name": "Red Scarf"}).json()["plan"]
    new_item = added[0]["outfitItems"][-1]
    assert new_item["name"] == "Red Scarf"
    assert new_item["type"] == "other"

    removed = client.delete(f"/sessions/{session_id}/days/0/items/{new_item['id']}").json()["plan"]
    assert len(removed[0]["outfitItems"]) == len(plan[0]["outfitItems"])

    assert client.delete(f"/sessions/{session_id}/plan").status_code == 200
    assert client.get(f"/sessions/{session_id}").json()["plan"] is None


def test_empty_item_name_is_rejected(client: TestClient) -> None:
    session_id = _session(client)
    client.post(f"/sessions/{session_id}/plan", json={})

    response = client.post(f"/sessions/{session_id}/days/2/items", json={"name": "  "})

    assert response.status_code == 422
    state = client.get(f"/sessions/{session_id}").json()
    assert len(state["plan"][2]["outfitItems"]) == 4


def test_generation_failure_returns_502_and_records_error(
    client: TestClient, model_client: MockModelClient
) -> None:
    model_client.plan_error = RemoteModelError("quota exceeded")
    session_id = _session(client)

    response = client.post(f"/sessions/{session_id}/plan", json={})

    assert response.status_code == 502
    assert "generating your plan" in response.json()["detail"]
    state = client.get(f"/sessions/{session_id}").json()
    assert state["error"] == response.json()["detail"]
    assert client.delete(f"/sessions/{session_id}/error").status_code == 200
    assert client.get(f"/sessions/{session_id}").json()["error"] is None


def test_photo_is_decoded_from_data_url(client: TestClient, model_client: MockModelClient) -> None:
    png = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
    session_id = _session(client)

    response = client.post(
        f"/sessions/{session_id}/plan",
        json={"userPhotoBase64": "data:image/png;base64," + base64.b64encode(png).decode()},
    )

    assert response.status_code == 200
    assert model_client.plan_requests[-1].photo.data == png


def test_invalid_photo_is_rejected(client: TestClient) -> None:
    session_id = _session(client)

    response = client.post(f"/sessions/{session_id}/plan", json={"userPhotoBase64": "%%%"})

    assert response.status_code == 422


def test_bad_time_is_rejected(client: TestClient) -> None:
    session_id = _session(client)

    response = client.post(f"/sessions/{session_id}/plan", json={"startTime": "25:00"})

    assert response.status_code == 422


def test_unknown_session_is_404(client: TestClient) -> None:
    assert client.get("/sessions/missing").status_code == 404


def test_shop_item_and_close_lookup(client: TestClient) -> None:
    session_id = _session(client)
    client.post(f"/sessions/{session_id}/plan", json={})

    response = client.post(f"/sessions/{session_id}/lookups", json={"day_index": 5, "item_id": "sat-1"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["result"]["suggestions"][0]["link"] == "https://shop.example/hoodie"
    assert body["result"]["view_more_url"].startswith("https://www.google.com/search?tbm=shop&q=")

    assert client.delete(f"/sessions/{session_id}/lookups").status_code == 200
    assert client.get(f"/sessions/{session_id}").json()["lookup"]["is_open"] is False


def test_stateless_shopping_fallback(client: TestClient, model_client: MockModelClient) -> None:
    model_client.search_reply = SearchReply(text="nothing", citations=[])

    body = client.post("/shopping", json={"query": "Red Scarf"}).json()

    assert len(body["suggestions"]) == 1
    assert body["suggestions"][0]["link"] == "https://www.google.com/search?tbm=shop&q=Red%20Scarf"


def test_shopping_failure_is_502(client: TestClient, model_client: MockModelClient) -> None:
    model_client.search_error = RemoteModelError("offline")

    response = client.post("/shopping", json={"query": "Red Scarf"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Could not fetch shopping suggestions."


def test_unexpected_generation_failure_is_502(client: TestClient, model_client: MockModelClient) -> None:
    model_client.plan_error = ValueError("sdk")
    session_id = _session(client)

    response = client.post(f"/sessions/{session_id}/plan", json={})

    assert response.status_code == 502
    assert response.json()["detail"] == "Something went wrong while generating your plan. Please try again."
    assert client.get(f"/sessions/{session_id}").json()["is_loading"] is False


def test_unexpected_shopping_failure_is_502(client: TestClient, model_client: MockModelClient) -> None:
    session_id = _session(client)
    assert client.post(f"/sessions/{session_id}/plan", json={}).status_code == 200
    model_client.search_error = ValueError("sdk")

    response = client.post(f"/sessions/{session_id}/lookups", json={"day_index": 0, "item_id": "mon-1"})

    assert response.status_code == 502
    lookup = client.get(f"/sessions/{session_id}").json()["lookup"]
    assert lookup["is_loading"] is False
    assert lookup["error"] == "Could not fetch shopping suggestions."
