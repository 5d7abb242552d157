from __future__ import annotations

import pytest


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"emailTo": "someone@example.com"},
        {"emailMessage": "hello"},
        {"emailTo": "", "emailMessage": "hello"},
    ],
)
def test_send_email_missing_fields_is_400_without_sending(client, stubs, payload):
    response = client.post("/sendEmail", json=payload)

    assert response.status_code == 400
    assert "error" in response.get_json()
    assert stubs.mail.sent == []


def test_send_email_success_uses_fixed_subject(client, stubs):
    response = client.post(
        "/sendEmail",
        json={"emailTo": "someone@example.com", "emailMessage": "hello"},
    )

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "messageId": "<msg-1@gmail.com>"}
    assert stubs.mail.sent == [("someone@example.com", "FMS Message", "hello")]


def test_send_email_relay_failure_is_generic_500(client, stubs):
    stubs.mail.fail = True

    response = client.post(
        "/sendEmail",
        json={"emailTo": "someone@example.com", "emailMessage": "hello"},
    )

    assert response.status_code == 500
    assert response.get_json() == {"error": "delivery_error", "message": "Failed to send email"}


@pytest.mark.parametrize(
    "payload",
    [{}, {"emailTo": "someone@example.com", "emailMessage": "hello"}],
)
def test_send_email_without_credentials_is_configuration_error(unconfigured_client, stubs, payload):
    response = unconfigured_client.post("/sendEmail", json=payload)

    assert response.status_code == 500
    assert response.get_json()["error"] == "configuration_error"
    assert stubs.mail.sent == []


@pytest.mark.parametrize(
    "payload",
    [{}, {"to": "+15550100"}, {"message": "hi"}, {"to": None, "message": "hi"}],
)
def test_send_whatsapp_missing_fields_is_400_without_calling_gateway(client, stubs, payload):
    response = client.post("/sendWhatsApp", json=payload)

    assert response.status_code == 400
    assert "error" in response.get_json()
    assert stubs.gateway.sent == []


def test_send_whatsapp_success_relays_gateway_data(client, stubs):
    response = client.post("/sendWhatsApp", json={"to": "+15550100", "message": "hi"})

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "data": {"success": True, "msgId": 42}}
    assert stubs.gateway.sent == [("+15550100", "hi")]


def test_send_whatsapp_gateway_failure_is_generic_500(client, stubs):
    stubs.gateway.fail = True

    response = client.post("/sendWhatsApp", json={"to": "+15550100", "message": "hi"})

    assert response.status_code == 500
    assert response.get_json() == {
        "error": "gateway_error",
        "message": "Failed to send WhatsApp message",
    }


@pytest.mark.parametrize("payload", [{}, {"to": "+15550100", "message": "hi"}])
def test_send_whatsapp_without_gateway_config_is_configuration_error(unconfigured_client, stubs, payload):
    response = unconfigured_client.post("/sendWhatsApp", json=payload)

    assert response.status_code == 500
    assert response.get_json()["error"] == "configuration_error"
    assert stubs.gateway.sent == []


def test_non_object_json_body_is_treated_as_missing_fields(client, stubs):
    response = client.post("/sendWhatsApp", json=["+15550100", "hi"])

    assert response.status_code == 400
    assert stubs.gateway.sent == []


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
