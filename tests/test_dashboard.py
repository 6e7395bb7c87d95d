"""Overview figures."""
from datetime import datetime, timezone


async def test_stats_count_today(client, agent_headers, create_patient, create_doctor):
    today = datetime.now(timezone.utc).date().isoformat()
    active = await create_patient()
    paused = await create_patient(email="paused@hospital.org")
    await client.patch(f"/patients/{paused['id']}/status", json={"status": "paused"}, headers=agent_headers)
    doctor = await create_doctor(availabilityStatus="online")
    retired = await create_doctor(email="retired@hospital.org", licenseNumber="LIC-OLD")
    await client.post(f"/doctors/{retired['id']}/deactivate", headers=agent_headers)
    await client.post("/bookings", json={
        "patientId": active["id"], "doctorId": doctor["id"], "appointmentDate": today, "appointmentTime": "23:59",
    }, headers=agent_headers)
    for outcome in ("completed", "busy"):
        await client.post("/call-logs", json={
            "patientId": active["id"], "callType": "reminder", "outcome": outcome,
        }, headers=agent_headers)

    response = await client.get("/dashboard/stats", headers=agent_headers)

    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["patients"] == {"total": 2, "active": 1, "paused": 1, "completed": 0}
    assert stats["doctors"] == {"active": 1, "online": 1}
    assert stats["bookings"] == {"today": 1, "scheduled": 1}
    assert stats["calls"] == {"today": 2, "completedToday": 1}


async def test_stats_require_authentication(client):
    response = await client.get("/dashboard/stats")

    assert response.status_code == 401
