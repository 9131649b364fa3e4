"""End-to-end tests for POST /api/predict with the OpenAI call replaced by a fake."""

import json
import re
from types import SimpleNamespace

import httpx
import openai
import pytest

from predictor.schemas.prediction import REQUIRED_GROUPS

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_predict_returns_report(client, fake_openai, valid_payload, complete_analysis):
    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 200
    body = r.json()
    assert body["studentName"] == "민수"
    for group in REQUIRED_GROUPS:
        assert body[group] == complete_analysis[group]
    assert TIMESTAMP_RE.match(body["timestamp"])
    assert r.headers["X-Correlation-ID"]

    assert len(fake_openai.calls) == 1
    call = fake_openai.calls[0]
    assert call["model"] == "gpt-4o-mini"
    assert call["max_tokens"] == 4000
    assert call["response_format"] == {"type": "json_object"}
    assert [m["role"] for m in call["messages"]] == ["system", "user"]
    assert "양력 2008년 05월 14일 오전 09시" in call["messages"][1]["content"]
    assert fake_openai.closed


def test_missing_gender_is_rejected_without_upstream_call(client, fake_openai, valid_payload):
    del valid_payload["gender"]

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "입력 데이터가 올바르지 않습니다."
    assert body["code"] == "invalid_input"
    assert {"path": ["gender"], "message": "성별을 선택해주세요", "code": "missing"} in body["details"]
    assert fake_openai.calls == []


def test_missing_credential_is_misconfiguration(client, settings, fake_openai, valid_payload):
    settings.openai_api_key = ""

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 500
    assert r.json()["code"] == "misconfigured_service"
    assert r.json()["error"] == "OpenAI API 키가 설정되지 않았습니다."
    assert fake_openai.calls == []
    assert not fake_openai.entered


def test_non_json_content_is_parse_error(client, fake_openai, valid_payload):
    fake_openai.content = "죄송합니다. 분석을 완료할 수 없습니다."

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "response_parse_error"
    assert body["error"] == "AI 응답 JSON 파싱 실패"
    assert body["rawResponse"] == "죄송합니다. 분석을 완료할 수 없습니다."


@pytest.mark.parametrize("group", list(REQUIRED_GROUPS))
def test_missing_group_is_shape_error(client, fake_openai, valid_payload, complete_analysis, group):
    partial = {k: v for k, v in complete_analysis.items() if k != group}
    fake_openai.content = json.dumps(partial, ensure_ascii=False)

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "response_shape_error"
    assert body["details"] == {"missingGroups": [group]}
    assert body["rawResponse"] == fake_openai.content


def test_empty_placeholders_pass_shape_check(client, fake_openai, valid_payload):
    fake_openai.content = (
        '{"sajuAnalysis": {}, "mbtiAnalysis": {}, "learningStyle": {},'
        ' "studyRecommendations": {}, "personalizedTips": []}'
    )

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 200
    assert r.json()["personalizedTips"] == []


def test_upstream_status_error(client, fake_openai, valid_payload):
    response = httpx.Response(
        429,
        request=httpx.Request("POST", OPENAI_URL),
        text='{"error": {"message": "Rate limit reached"}}',
    )
    fake_openai.error = openai.RateLimitError("Rate limit reached", response=response, body=None)

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "upstream_error"
    assert body["error"] == "AI 분석 중 오류가 발생했습니다."
    assert body["details"]["upstreamStatus"] == 429
    assert "Rate limit reached" in body["details"]["body"]
    assert len(fake_openai.calls) == 1
    assert fake_openai.closed


def test_upstream_timeout(client, fake_openai, valid_payload):
    fake_openai.error = openai.APITimeoutError(request=httpx.Request("POST", OPENAI_URL))

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "upstream_error"
    assert body["details"]["upstreamStatus"] is None


def test_malformed_upstream_envelope_is_upstream_error(client, fake_openai, valid_payload):
    response = httpx.Response(200, request=httpx.Request("POST", OPENAI_URL), text="garbage")
    fake_openai.error = openai.APIResponseValidationError(response=response, body="garbage")

    r = client.post(
        "/api/predict",
        json=valid_payload,
        headers={"Origin": "http://localhost:5173", "X-Correlation-ID": "env-1"},
    )

    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "upstream_error"
    assert body["details"]["upstreamStatus"] == 200
    assert r.headers["X-Correlation-ID"] == "env-1"
    assert r.headers["access-control-allow-origin"] == "*"
    assert fake_openai.closed


def test_non_finite_numbers_are_parse_error(client, fake_openai, valid_payload, complete_analysis):
    complete_analysis["learningStyle"]["score"] = float("nan")
    fake_openai.content = json.dumps(complete_analysis, ensure_ascii=False)

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "response_parse_error"
    assert "NaN" in body["rawResponse"]


def test_no_choices_is_parse_error(client, fake_openai, valid_payload):
    fake_openai.response = SimpleNamespace(choices=[])

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 500
    assert r.json()["code"] == "response_parse_error"
    assert r.json()["error"] == "AI 응답을 파싱할 수 없습니다."


def test_malformed_json_body(client, fake_openai):
    r = client.post(
        "/api/predict",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == 400
    assert r.json()["code"] == "invalid_input"
    assert fake_openai.calls == []


def test_legacy_mbti_key_is_accepted(client, valid_payload):
    valid_payload["mbti"] = valid_payload.pop("personalityCode")

    r = client.post("/api/predict", json=valid_payload)

    assert r.status_code == 200


def test_correlation_id_is_echoed(client, valid_payload):
    r = client.post("/api/predict", json=valid_payload, headers={"X-Correlation-ID": "abc-123"})

    assert r.headers["X-Correlation-ID"] == "abc-123"


def test_form_options(client):
    r = client.get("/api/predict/options")

    assert r.status_code == 200
    body = r.json()
    assert body["years"][-1] == "1955"
    assert body["hours"] == [f"{h:02d}" for h in range(1, 13)]
    assert len(body["mbtiTypes"]) == 16
    assert [s["id"] for s in body["sections"]] == [
        "sajuAnalysis", "mbtiAnalysis", "learningStyle", "recommendations", "tips",
    ]
    assert body["defaultSection"] == "sajuAnalysis"


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
