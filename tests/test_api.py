from __future__ import annotations

from prometheus_client.parser import text_string_to_metric_families

WORKED_EXAMPLE = "00020101021229370016A000000677010111011300668123456785802TH53037645406100.506304F88B"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_api_key_is_required(client):
    response = client.post("/v1/payload", json={"identifier": "0812345678"}, headers={"x-api-key": "wrong"})
    assert response.status_code == 401


def test_create_payload(client, auth_headers):
    response = client.post(
        "/v1/payload",
        json={"identifier": "0812345678", "amount": "100.50"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["payload"] == WORKED_EXAMPLE
    assert body["crc"] == "F88B"
    assert body["kind"] == "PHONE"
    assert body["sanitized"] == "66812345678"
    assert body["amount"] == "100.50"


def test_numeric_amount(client, auth_headers):
    response = client.post("/v1/payload", json={"identifier": "0812345678", "amount": 100.5}, headers=auth_headers)
    assert response.json()["payload"] == WORKED_EXAMPLE


def test_config_override(client, auth_headers):
    response = client.post(
        "/v1/payload",
        json={
            "identifier": "0812345678",
            "amount": "100.50",
            "config": {"country_code": "US", "currency_code": "840"},
        },
        headers=auth_headers,
    )
    assert response.json()["payload"].endswith("5802US53038405406100.506304E668")


def test_config_override_is_validated(client, auth_headers):
    response = client.post(
        "/v1/payload",
        json={"identifier": "0812345678", "config": {"country_code": "thailand"}},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_encode_error_is_typed(client, auth_headers):
    response = client.post("/v1/payload", json={"identifier": "1234567890"}, headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_MERCHANT_ID"


def test_amount_error(client, auth_headers):
    response = client.post(
        "/v1/payload",
        json={"identifier": "0812345678", "amount": "100.505"},
        headers=auth_headers,
    )
    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_AMOUNT"


def test_validation_bypass(client, auth_headers):
    response = client.post(
        "/v1/payload",
        json={"identifier": "1234567890123", "config": {"validate_input": False}},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["kind"] == "TAX_ID"


def test_qr_png(client, auth_headers):
    response = client.post(
        "/v1/qr",
        json={"identifier": "0812345678", "amount": "100.50", "format": "png"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["payload"] == WORKED_EXAMPLE
    assert body["format"] == "png"
    assert body["image"].startswith("data:image/png;base64,")


def test_qr_svg(client, auth_headers):
    response = client.post("/v1/qr", json={"identifier": "123456789012345", "format": "svg"}, headers=auth_headers)
    assert response.status_code == 200
    assert "<svg" in response.json()["image"]


def test_qr_rejects_unknown_format(client, auth_headers):
    response = client.post("/v1/qr", json={"identifier": "0812345678", "format": "gif"}, headers=auth_headers)
    assert response.status_code == 422


def test_classify_valid(client, auth_headers):
    response = client.post("/v1/identifiers/classify", json={"identifier": "081-234-5678"}, headers=auth_headers)
    assert response.json() == {
        "raw": "081-234-5678",
        "sanitized": "66812345678",
        "kind": "PHONE",
        "valid": True,
        "error_code": None,
        "error_message": None,
    }


def test_classify_reports_rule(client, auth_headers):
    response = client.post("/v1/identifiers/classify", json={"identifier": "1234567890123"}, headers=auth_headers)
    body = response.json()
    assert body["kind"] == "TAX_ID"
    assert body["valid"] is False
    assert body["error_code"] == "INVALID_TAX_ID_CHECKSUM"


def test_verify(client, auth_headers):
    good = client.post("/v1/payload/verify", json={"payload": WORKED_EXAMPLE}, headers=auth_headers)
    assert good.json() == {"valid": True, "crc": "F88B"}
    bad = client.post("/v1/payload/verify", json={"payload": WORKED_EXAMPLE[:-1] + "C"}, headers=auth_headers)
    assert bad.json() == {"valid": False, "crc": None}


def test_metrics_count_payloads_and_errors(client, auth_headers):
    client.post("/v1/payload", json={"identifier": "0812345678"}, headers=auth_headers)
    client.post("/v1/payload", json={"identifier": "1234567890"}, headers=auth_headers)
    response = client.get("/metrics")
    assert response.status_code == 200
    samples = {
        (sample.name, tuple(sorted(sample.labels.items()))): sample.value
        for family in text_string_to_metric_families(response.text)
        for sample in family.samples
    }
    assert samples[("promptqr_payloads_total", (("initiation", "static"), ("kind", "PHONE")))] >= 1
    assert samples[("promptqr_encode_errors_total", (("code", "INVALID_MERCHANT_ID"), ("route", "/v1/payload")))] >= 1
    assert any(name == "promptqr_http_requests_total" for name, _ in samples)
