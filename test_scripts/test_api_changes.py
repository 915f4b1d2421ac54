# HTTP tests for the change and scoring routes
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_db
from app.main import create_app

HEADERS = {"X-CHANGEFLOW-SECRET": "test-secret"}


@pytest.fixture()
def client(session_factory):
    app = create_app(create_schema=False)

    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c


def _create(client, wizard=None):
    resp = client.post(
        "/changes",
        json={"title": "Upgrade checkout", "requesterId": "req-1", "wizardData": wizard or {}},
        headers=HEADERS,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_missing_secret_is_unauthorized(client):
    assert client.get("/changes/1").status_code == 401
    assert client.get("/changes/1", headers={"X-CHANGEFLOW-SECRET": "wrong"}).status_code == 401


def test_create_and_get_change(client, revenue_wizard):
    created = _create(client, revenue_wizard)
    assert created["status"] == "submitted"

    resp = client.get(f"/changes/{created['id']}", headers=HEADERS)
    assert resp.status_code == 200
    body = resp.json()
    assert body["request_number"] == created["request_number"]
    assert body["wizard_data"]["revenueDetails"]["expectedRevenue"] == "£100,000"


def test_get_unknown_change_is_404(client):
    assert client.get("/changes/999", headers=HEADERS).status_code == 404


def test_cab_approve_rescores(client, revenue_wizard):
    created = _create(client, revenue_wizard)

    resp = client.post(
        f"/changes/{created['id']}/cab-decision",
        json={"decision": "approve", "reviewerId": "cab-1", "cabAssessment": {}, "comments": "ship it"},
        headers=HEADERS,
    )

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["status"] == "approved"
    assert body["benefit_score"] == pytest.approx(66.7)
    assert body["risk_level"] in {"low", "medium", "high", "critical"}
    assert [v["reviewer_id"] for v in body["review_votes"]] == ["cab-1"]
    assert [c["text"] for c in body["comments"]] == ["ship it"]


def test_cab_decision_error_mapping(client):
    created = _create(client)
    url = f"/changes/{created['id']}/cab-decision"

    bad_decision = client.post(url, json={"decision": "maybe", "reviewerId": "cab-1"}, headers=HEADERS)
    assert bad_decision.status_code == 400

    bad_assessment = client.post(
        url, json={"decision": "approve", "reviewerId": "cab-1", "cabAssessment": {"complexity": "hard"}}, headers=HEADERS
    )
    assert bad_assessment.status_code == 400

    missing = client.post("/changes/999/cab-decision", json={"decision": "approve", "reviewerId": "cab-1"}, headers=HEADERS)
    assert missing.status_code == 404

    ok = client.post(url, json={"decision": "reject", "reviewerId": "cab-1"}, headers=HEADERS)
    assert ok.status_code == 200
    again = client.post(url, json={"decision": "approve", "reviewerId": "cab-1"}, headers=HEADERS)
    assert again.status_code == 409


def test_schedule_validation_maps_to_400(client):
    created = _create(client)
    client.post(f"/changes/{created['id']}/cab-decision", json={"decision": "approve", "reviewerId": "cab-1"}, headers=HEADERS)

    resp = client.post(
        f"/changes/{created['id']}/schedule",
        json={"scheduledStart": "2026-11-02T22:00:00Z", "scheduledEnd": "2026-11-02T21:00:00Z"},
        headers=HEADERS,
    )
    assert resp.status_code == 400


@pytest.mark.parametrize("kind", ["benefit", "effort", "risk"])
def test_score_endpoints(client, revenue_wizard, kind):
    resp = client.post(f"/scoring/{kind}", json=revenue_wizard, headers=HEADERS)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["kind"] == kind
    assert 0 <= body["score"] <= 100
    assert body["factors"]


def test_benefit_endpoint_scenario(client, revenue_wizard):
    body = client.post("/scoring/benefit", json=revenue_wizard, headers=HEADERS).json()
    assert body["score"] == pytest.approx(66.7)
    assert body["factors"]["revenueImprovement"]["timeScore"] == 40


def test_unknown_score_kind_is_404(client):
    assert client.post("/scoring/priority", json={}, headers=HEADERS).status_code == 404


@pytest.mark.parametrize("kind", ["benefit", "effort", "risk"])
def test_score_endpoints_accept_wrongly_typed_fields(client, kind):
    doc = {
        "changeReasons": {"revenueImprovement": True},
        "revenueDetails": {"expectedRevenue": [1, 2], "revenueDescription": 123},
        "impactedUsers": {"n": 5},
        "complexity": [7],
    }
    resp = client.post(f"/scoring/{kind}", json=doc, headers=HEADERS)
    assert resp.status_code == 200
    assert 0 <= resp.json()["score"] <= 100


def test_schema_is_created_on_startup_not_on_build(monkeypatch):
    import app.main as main_module

    calls = []
    monkeypatch.setattr(main_module, "ensure_schema", lambda eng: calls.append(eng))

    app = main_module.create_app()
    assert calls == []

    with TestClient(app) as c:
        assert c.get("/health").json() == {"ok": True}
    assert calls == [main_module.engine]


def test_schema_creation_can_be_disabled(monkeypatch):
    import app.main as main_module

    calls = []
    monkeypatch.setattr(main_module, "ensure_schema", lambda eng: calls.append(eng))

    with TestClient(main_module.create_app(create_schema=False)):
        pass
    assert calls == []
