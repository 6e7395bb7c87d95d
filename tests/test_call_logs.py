"""Call logs and reminder call dispatch."""
from datetime import datetime, timezone

import pytest

from medicall.common.integrations import bland_ai_client
from medicall.common.utils.exceptions import UpstreamError
from medicall.common.utils.global_messages import GlobalMessages


@pytest.fixture
def placed_calls(monkeypatch):
    """Replace the voice provider; records every call it is asked to place."""
    calls = []

    async def fake_make_call(phone_number, script, metadata):
        calls.append({"phone_number": phone_number, "script": script, "metadata": metadata})
        return f"call-{len(calls)}"

    monkeypatch.setattr(bland_ai_client, "make_call", fake_make_call)
    return calls


async def test_create_call_log_records_caller_as_agent(client, agent, agent_headers, create_patient):
    patient = await create_patient()

    response = await client.post("/call-logs", json={
        "patientId": patient["id"],
        "callType": "reminder",
        "outcome": "completed",
        "duration": 95,
        "reminderDetails": {"medicationName": "Metformin", "dosage": "500mg"},
        "agentId": "00000000-0000-0000-0000-000000000000",
    }, headers=agent_headers)

    assert response.status_code == 201
    log = response.json()["callLog"]
    assert log["agent"]["id"] == str(agent.id)
    assert log["patient"]["mobileNumber"] == "5551234567"
    assert log["reminderDetails"]["medicationName"] == "Metformin"
    assert log["followUpRequired"] is False
    assert log["callDateTime"] is not None


async def test_create_call_log_for_unknown_patient(client, agent_headers):
    response = await client.post("/call-logs", json={
        "patientId": "00000000-0000-0000-0000-000000000001",
        "callType": "emergency",
        "outcome": "transferred-emergency",
    }, headers=agent_headers)

    assert response.status_code == 404


async def test_list_filters_and_date_bounds(client, agent_headers, create_patient):
    patient = await create_patient()
    for when, outcome in (
        ("2030-01-10T09:00:00Z", "completed"),
        ("2030-01-12T18:00:00Z", "no-answer"),
        ("2030-01-15T08:00:00Z", "completed"),
    ):
        await client.post("/call-logs", json={
            "patientId": patient["id"], "callType": "reminder", "outcome": outcome, "callDateTime": when,
        }, headers=agent_headers)

    newest_first = await client.get("/call-logs", headers=agent_headers)
    from_start = await client.get("/call-logs", params={"startDate": "2030-01-12"}, headers=agent_headers)
    until_end = await client.get("/call-logs", params={"endDate": "2030-01-12"}, headers=agent_headers)
    completed = await client.get("/call-logs", params={"outcome": "completed"}, headers=agent_headers)
    bad_type = await client.get("/call-logs", params={"callType": "fax"}, headers=agent_headers)

    days = [log["callDateTime"][:10] for log in newest_first.json()["callLogs"]]
    assert days == ["2030-01-15", "2030-01-12", "2030-01-10"]
    assert len(from_start.json()["callLogs"]) == 2
    assert len(until_end.json()["callLogs"]) == 2
    assert len(completed.json()["callLogs"]) == 2
    assert bad_type.status_code == 400


async def test_update_and_delete_call_log(client, agent_headers, create_patient):
    patient = await create_patient()
    created = await client.post("/call-logs", json={
        "patientId": patient["id"], "callType": "follow-up", "outcome": "busy",
    }, headers=agent_headers)
    log_id = created.json()["callLog"]["id"]

    updated = await client.put(f"/call-logs/{log_id}", json={
        "remarks": "Call back tomorrow", "followUpRequired": True,
    }, headers=agent_headers)
    deleted = await client.delete(f"/call-logs/{log_id}", headers=agent_headers)
    missing = await client.get(f"/call-logs/{log_id}", headers=agent_headers)

    assert updated.json()["callLog"]["remarks"] == "Call back tomorrow"
    assert updated.json()["callLog"]["followUpRequired"] is True
    assert updated.json()["callLog"]["outcome"] == "busy"
    assert deleted.status_code == 200
    assert missing.status_code == 404


async def test_dispatch_medication_reminder(client, agent, agent_headers, create_patient, placed_calls):
    patient = await create_patient()

    response = await client.post("/call-logs/dispatch", json={
        "patientId": patient["id"], "callType": "reminder",
    }, headers=agent_headers)
    stored = await client.get(f"/patients/{patient['id']}", headers=agent_headers)

    assert response.status_code == 200
    assert response.json() == {"callId": "call-1", "message": GlobalMessages.CALL_DISPATCHED}
    call = placed_calls[0]
    assert call["phone_number"] == "5551234567"
    assert "Metformin" in call["script"] and "500mg" in call["script"]
    assert call["metadata"] == {
        "patient_id": patient["id"],
        "agent_id": str(agent.id),
        "call_type": "reminder",
        "patient_name": "John Carter",
    }
    assert stored.json()["patient"]["lastReminderSent"] is not None


async def test_dispatch_appointment_reminder(client, agent_headers, create_patient, create_doctor, placed_calls):
    patient = await create_patient()
    doctor = await create_doctor()
    booking = (await client.post("/bookings", json={
        "patientId": patient["id"], "doctorId": doctor["id"],
        "appointmentDate": "2030-03-15", "appointmentTime": "10:30",
    }, headers=agent_headers)).json()["booking"]

    response = await client.post("/call-logs/dispatch", json={
        "patientId": patient["id"], "callType": "appointment", "bookingId": booking["id"],
    }, headers=agent_headers)
    stored = await client.get(f"/bookings/{booking['id']}", headers=agent_headers)

    assert response.status_code == 200
    assert "Dr. Sarah Lee" in placed_calls[0]["script"]
    assert "March 15, 2030" in placed_calls[0]["script"]
    assert stored.json()["booking"]["reminderSent"] is True


async def test_dispatch_refused_for_paused_or_opted_out(client, agent_headers, create_patient, placed_calls):
    paused = await create_patient()
    await client.patch(f"/patients/{paused['id']}/status", json={"status": "paused"}, headers=agent_headers)
    opted_out = await create_patient(
        email="quiet@hospital.org", reminderPreferences={"sms": True, "voiceCall": False, "email": False}
    )

    r1 = await client.post("/call-logs/dispatch", json={"patientId": paused["id"]}, headers=agent_headers)
    r2 = await client.post("/call-logs/dispatch", json={"patientId": opted_out["id"]}, headers=agent_headers)

    assert r1.status_code == 400
    assert r1.json()["error"] == GlobalMessages.PATIENT_NOT_ACTIVE
    assert r2.status_code == 400
    assert r2.json()["error"] == GlobalMessages.VOICE_CALLS_DISABLED
    assert placed_calls == []


async def test_dispatch_validates_call_type_and_medication(client, agent_headers, create_patient, placed_calls):
    patient = await create_patient()

    emergency = await client.post("/call-logs/dispatch", json={
        "patientId": patient["id"], "callType": "emergency",
    }, headers=agent_headers)
    no_booking = await client.post("/call-logs/dispatch", json={
        "patientId": patient["id"], "callType": "appointment",
    }, headers=agent_headers)
    bad_index = await client.post("/call-logs/dispatch", json={
        "patientId": patient["id"], "medicationIndex": 3,
    }, headers=agent_headers)

    assert emergency.status_code == 400
    assert no_booking.json()["details"][0]["field"] == "bookingId"
    assert bad_index.json()["details"][0]["field"] == "medicationIndex"
    assert placed_calls == []


async def test_dispatch_provider_failure_is_bad_gateway(client, agent_headers, create_patient, monkeypatch):
    patient = await create_patient()

    async def failing_call(phone_number, script, metadata):
        raise UpstreamError(GlobalMessages.CALL_DISPATCH_FAILED)

    monkeypatch.setattr(bland_ai_client, "make_call", failing_call)

    response = await client.post("/call-logs/dispatch", json={"patientId": patient["id"]}, headers=agent_headers)
    stored = await client.get(f"/patients/{patient['id']}", headers=agent_headers)

    assert response.status_code == 502
    assert stored.json()["patient"]["lastReminderSent"] is None
