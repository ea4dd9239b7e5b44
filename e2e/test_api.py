"""API endpoint tests for the HTTP service."""

import dataclasses
import logging

from fastapi.testclient import TestClient

import main
from main import app

client = TestClient(app)

URL = "/v1/explain-error"


def test_root_is_informational():
    res = client.get("/")
    assert res.status_code == 200
    assert "ExplainError API is running" in res.text


def test_health():
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


# ── POST /v1/explain-error ────────────────────────────────────────────────────

class TestExplainError:
    def test_connection_refused_response(self):
        res = client.post(URL, json={
            "text": "Request to payment-service failed: ECONNREFUSED 10.0.0.5:443",
            "stack": "",
        })
        assert res.status_code == 200
        body = res.json()
        assert body["classification"] == "network/connection_refused"
        assert body["confidence"] == 0.78
        assert body["severity"] == "high"
        assert body["actionSignal"] == "review"
        assert {"type": "keyword_match", "value": "ECONNREFUSED", "weight": 0.45} in body["evidence"]

    def test_response_has_all_fields(self):
        body = client.post(URL, json={"text": "timeout"}).json()
        assert set(body) == {
            "classification",
            "confidence",
            "confidenceRationale",
            "severity",
            "evidence",
            "actionSignal",
            "explanation",
            "recommendedNextStep",
        }

    def test_raw_error_key(self):
        body = client.post(URL, json={"rawError": "401 Unauthorized: invalid token"}).json()
        assert body["classification"] == "auth/permission"
        assert body["actionSignal"] == "escalate"

    def test_message_key(self):
        body = client.post(URL, json={"message": "JavaScript heap out of memory"}).json()
        assert body["classification"] == "runtime/memory"

    def test_text_takes_precedence_over_message(self):
        body = client.post(URL, json={"text": "disk full", "message": "timeout"}).json()
        assert body["classification"] == "unknown"

    def test_stack_is_classified_too(self):
        body = client.post(URL, json={
            "text": "request failed",
            "stack": "Error: connect ECONNREFUSED 127.0.0.1:6379",
        }).json()
        assert body["classification"] == "network/connection_refused"

    def test_empty_object_is_unknown(self):
        res = client.post(URL, json={})
        assert res.status_code == 200
        body = res.json()
        assert body["classification"] == "unknown"
        assert body["confidence"] == 0.35
        assert body["actionSignal"] == "review"
        assert body["evidence"] == [
            {"type": "weak_pattern_match", "value": "no strong markers found", "weight": 0.1},
        ]

    def test_empty_body_is_unknown(self):
        res = client.post(URL)
        assert res.status_code == 200
        assert res.json()["classification"] == "unknown"

    def test_malformed_json_is_400(self):
        res = client.post(URL, content=b"{not json", headers={"Content-Type": "application/json"})
        assert res.status_code == 400

    def test_array_body_is_treated_as_empty_object(self):
        res = client.post(URL, json=["timeout"])
        assert res.status_code == 200
        assert res.json()["classification"] == "unknown"

    def test_scalar_body_is_400(self):
        res = client.post(URL, json="timeout")
        assert res.status_code == 400

    def test_array_field_is_joined_and_classified(self):
        res = client.post(URL, json={"text": ["ETIMEDOUT"]})
        assert res.status_code == 200
        assert res.json()["classification"] == "network/timeout"

    def test_object_field_degrades_to_unknown(self):
        res = client.post(URL, json={"text": {"nested": "timeout"}})
        assert res.status_code == 200
        assert res.json()["classification"] == "unknown"

    def test_zero_text_falls_through_to_next_key(self):
        body = client.post(URL, json={"text": 0, "rawError": "ECONNREFUSED"}).json()
        assert body["classification"] == "network/connection_refused"


# ── Body size limit ───────────────────────────────────────────────────────────

class TestBodyLimit:
    def test_oversized_body_is_413(self):
        res = client.post(URL, json={"text": "x" * 1_100_000})
        assert res.status_code == 413

    def test_body_just_under_one_mebibyte_is_accepted(self):
        res = client.post(URL, json={"text": "x" * 1_040_000})
        assert res.status_code == 200
        assert res.json()["classification"] == "unknown"

    def test_custom_limit_is_enforced(self, monkeypatch):
        monkeypatch.setattr(main, "settings", dataclasses.replace(main.settings, max_body_bytes=64))
        res = client.post(URL, json={"text": "connect ECONNREFUSED " + "x" * 100})
        assert res.status_code == 413

    def test_custom_limit_allows_small_body(self, monkeypatch):
        monkeypatch.setattr(main, "settings", dataclasses.replace(main.settings, max_body_bytes=64))
        res = client.post(URL, json={"text": "ECONNREFUSED"})
        assert res.status_code == 200

    def test_chunked_body_over_limit_is_413(self, monkeypatch):
        monkeypatch.setattr(main, "settings", dataclasses.replace(main.settings, max_body_bytes=64))
        chunks = iter([b'{"text": "', b"x" * 100, b'"}'])
        res = client.post(URL, content=chunks, headers={"Content-Type": "application/json"})
        assert res.status_code == 413

    def test_invalid_content_length_is_400(self):
        res = client.post(URL, content=b"{}", headers={"Content-Length": "abc"})
        assert res.status_code == 400


# ── Request logging ───────────────────────────────────────────────────────────

class TestRequestLogging:
    def _messages(self, caplog) -> list[str]:
        return [r.getMessage() for r in caplog.records if r.name == "main" and r.levelno == logging.INFO]

    def test_logs_incoming_flags_and_classification(self, caplog):
        caplog.set_level(logging.INFO, logger="main")
        client.post(URL, json={"text": "upstream timeout", "context": {"service": "billing"}})
        messages = self._messages(caplog)
        assert "Incoming: hasText=True hasContext=True" in messages
        assert any(m.startswith("Classified as network/timeout") for m in messages)

    def test_empty_object_context_counts_as_present(self, caplog):
        caplog.set_level(logging.INFO, logger="main")
        client.post(URL, json={"text": "timeout", "context": {}})
        assert "Incoming: hasText=True hasContext=True" in self._messages(caplog)

    def test_falsy_values_count_as_absent(self, caplog):
        caplog.set_level(logging.INFO, logger="main")
        client.post(URL, json={"text": 0, "message": "timeout", "context": ""})
        assert "Incoming: hasText=False hasContext=False" in self._messages(caplog)


# ── CORS ──────────────────────────────────────────────────────────────────────

class TestCors:
    def test_allowed_origin_preflight(self):
        res = client.options(URL, headers={
            "Origin": "http://localhost:5500",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        })
        assert res.status_code == 200
        assert res.headers["access-control-allow-origin"] == "http://localhost:5500"

    def test_disallowed_origin_preflight(self):
        res = client.options(URL, headers={
            "Origin": "https://evil.example",
            "Access-Control-Request-Method": "POST",
        })
        assert res.status_code == 400

    def test_simple_request_from_disallowed_origin_has_no_cors_header(self):
        res = client.post(URL, json={"text": "timeout"}, headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in res.headers
