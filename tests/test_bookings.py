"""Bookings: references, fee defaulting, ordering and status changes."""
import uuid


def _booking(patient, doctor, **overrides) -> dict:
    payload = {
        "patientId": patient["id"],
        "doctorId": doctor["id"],
        "appointmentDate": "2030-03-15",
        "appointmentTime": "10:30",
        "symptoms": "Chest pain on exertion",
    }
    payload.update(overrides)
    return payload


async def test_create_booking_defaults_fee_to_doctor_fee(client, agent, agent_headers, create_patient, create_doctor):
    patient = await create_patient()
    doctor = await create_doctor(consultationFee=200)

    response = await client.post("/bookings", json=_booking(patient, doctor), headers=agent_headers)

    assert response.status_code == 201
    booking = response.json()["booking"]
    assert booking["fee"] == 200
    assert booking["status"] == "scheduled"
    assert booking["paymentStatus"] == "pending"
    assert booking["duration"] == 30
    assert booking["reminderSent"] is False
    assert booking["patient"]["name"] == "John Carter"
    assert booking["doctor"] == {
        "id": doctor["id"], "name": "Sarah Lee", "specialty": "Cardiology", "avatar": "",
    }
    assert booking["createdBy"]["id"] == str(agent.id)


async def test_explicit_fee_wins(client, agent_headers, create_patient, create_doctor):
    patient = await create_patient()
    doctor = await create_doctor()

    response = await client.post("/bookings", json=_booking(patient, doctor, fee=75), headers=agent_headers)

    assert response.json()["booking"]["fee"] == 75


async def test_unknown_patient_or_inactive_doctor_is_not_found(client, agent_headers, create_patient, create_doctor):
    patient = await create_patient()
    doctor = await create_doctor()
    await client.post(f"/doctors/{doctor['id']}/deactivate", headers=agent_headers)
    ghost = {"id": str(uuid.uuid4())}

    no_patient = await client.post("/bookings", json=_booking(ghost, doctor), headers=agent_headers)
    inactive_doctor = await client.post("/bookings", json=_booking(patient, doctor), headers=agent_headers)

    assert no_patient.status_code == 404
    assert no_patient.json()["error"] == "Patient not found"
    assert inactive_doctor.status_code == 404
    assert inactive_doctor.json()["error"] == "Doctor not found"


async def test_invalid_time_and_short_duration_rejected(client, agent_headers, create_patient, create_doctor):
    patient = await create_patient()
    doctor = await create_doctor()

    response = await client.post(
        "/bookings", json=_booking(patient, doctor, appointmentTime="25:00", duration=10), headers=agent_headers
    )

    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["details"]}
    assert fields == {"appointmentTime", "duration"}


async def test_list_is_in_calendar_order_and_filters(client, agent_headers, create_patient, create_doctor):
    patient = await create_patient()
    doctor = await create_doctor()
    for day, time in (("2030-03-16", "09:00"), ("2030-03-15", "14:00"), ("2030-03-15", "08:30")):
        await client.post(
            "/bookings", json=_booking(patient, doctor, appointmentDate=day, appointmentTime=time), headers=agent_headers
        )

    everything = await client.get("/bookings", headers=agent_headers)
    one_day = await client.get("/bookings", params={"date": "2030-03-15"}, headers=agent_headers)
    by_doctor = await client.get("/bookings", params={"doctorId": str(uuid.uuid4())}, headers=agent_headers)

    order = [(b["appointmentDate"], b["appointmentTime"]) for b in everything.json()["bookings"]]
    assert order == [("2030-03-15", "08:30"), ("2030-03-15", "14:00"), ("2030-03-16", "09:00")]
    assert len(one_day.json()["bookings"]) == 2
    assert by_doctor.json()["bookings"] == []


async def test_cancel_reason_kept_only_when_cancelled(client, agent_headers, create_patient, create_doctor):
    patient = await create_patient()
    doctor = await create_doctor()
    booking = (await client.post("/bookings", json=_booking(patient, doctor), headers=agent_headers)).json()["booking"]
    url = f"/bookings/{booking['id']}/status"

    cancelled = await client.patch(url, json={"status": "cancelled", "cancelReason": "Travelling"}, headers=agent_headers)
    rescheduled = await client.patch(url, json={"status": "scheduled", "cancelReason": "ignored"}, headers=agent_headers)

    assert cancelled.json()["booking"]["cancelReason"] == "Travelling"
    assert rescheduled.json()["booking"]["status"] == "scheduled"
    assert rescheduled.json()["booking"]["cancelReason"] is None


async def test_payment_status_is_independent(client, agent_headers, create_patient, create_doctor):
    patient = await create_patient()
    doctor = await create_doctor()
    booking = (await client.post("/bookings", json=_booking(patient, doctor), headers=agent_headers)).json()["booking"]

    await client.patch(f"/bookings/{booking['id']}/status", json={"status": "completed"}, headers=agent_headers)
    paid = await client.patch(
        f"/bookings/{booking['id']}/payment-status", json={"paymentStatus": "paid"}, headers=agent_headers
    )

    assert paid.json()["booking"]["paymentStatus"] == "paid"
    assert paid.json()["booking"]["status"] == "completed"

    by_payment = await client.get("/bookings", params={"paymentStatus": "paid"}, headers=agent_headers)
    assert len(by_payment.json()["bookings"]) == 1


async def test_update_and_delete(client, agent_headers, create_patient, create_doctor):
    patient = await create_patient()
    doctor = await create_doctor()
    booking = (await client.post("/bookings", json=_booking(patient, doctor), headers=agent_headers)).json()["booking"]

    updated = await client.put(
        f"/bookings/{booking['id']}", json={"appointmentTime": "11:00", "consultationType": "video"}, headers=agent_headers
    )
    deleted = await client.delete(f"/bookings/{booking['id']}", headers=agent_headers)
    missing = await client.get(f"/bookings/{booking['id']}", headers=agent_headers)

    assert updated.json()["booking"]["appointmentTime"] == "11:00"
    assert updated.json()["booking"]["consultationType"] == "video"
    assert updated.json()["booking"]["symptoms"] == "Chest pain on exertion"
    assert deleted.status_code == 200
    assert missing.status_code == 404
