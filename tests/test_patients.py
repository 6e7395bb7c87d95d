"""Patient registry: validation, ownership, search and status changes."""
from datetime import date, timedelta

import pytest


async def test_create_records_caller_as_creator(client, agent, admin, agent_headers, patient_payload):
    payload = patient_payload(createdBy=str(admin.id))

    response = await client.post("/patients", json=payload, headers=agent_headers)

    assert response.status_code == 201
    patient = response.json()["patient"]
    assert patient["createdBy"] == {"id": str(agent.id), "name": "Call Center Agent", "email": "agent@medicall.com"}
    assert patient["status"] == "active"
    assert patient["reminderPreferences"] == {"sms": True, "voiceCall": True, "email": False}
    assert patient["medications"][0]["times"] == ["08:00", "20:00"]
    assert patient["medications"][0]["isActive"] is True


async def test_create_requires_authentication(client, patient_payload):
    response = await client.post("/patients", json=patient_payload())

    assert response.status_code == 401


async def test_empty_medication_list_is_rejected(client, agent_headers, patient_payload):
    response = await client.post("/patients", json=patient_payload(medications=[]), headers=agent_headers)

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "medications"


async def test_medication_without_times_is_rejected(client, agent_headers, patient_payload):
    for times in ([], [""], ["   "]):
        payload = patient_payload(medications=[{"name": "Lisinopril", "dosage": "10mg", "times": times}])

        response = await client.post("/patients", json=payload, headers=agent_headers)

        assert response.status_code == 400, times
        fields = [d["field"] for d in response.json()["details"]]
        assert "medications.0.times" in fields

    listed = await client.get("/patients", headers=agent_headers)
    assert listed.json()["patients"] == []


async def test_blank_medication_times_are_dropped(client, agent_headers, patient_payload):
    payload = patient_payload(medications=[{"name": "Lisinopril", "dosage": "10mg", "times": ["", "09:00", " "]}])

    response = await client.post("/patients", json=payload, headers=agent_headers)

    assert response.status_code == 201
    assert response.json()["patient"]["medications"][0]["times"] == ["09:00"]


async def test_partial_emergency_contact_is_never_stored(client, agent_headers, patient_payload):
    payload = patient_payload(emergencyContact={"name": "Mary Carter", "phoneNumber": "5550001111"})

    response = await client.post("/patients", json=payload, headers=agent_headers)

    assert response.status_code == 400
    assert any("emergencyContact" in d["field"] or "emergency_contact" in d["field"]
               for d in response.json()["details"])
    listed = await client.get("/patients", headers=agent_headers)
    assert listed.json()["patients"] == []


async def test_blank_emergency_contact_means_absent(client, agent_headers, patient_payload):
    payload = patient_payload(emergencyContact={"name": "", "relationship": " ", "phoneNumber": ""})

    response = await client.post("/patients", json=payload, headers=agent_headers)

    assert response.status_code == 201
    assert response.json()["patient"]["emergencyContact"] is None


async def test_complete_emergency_contact_is_stored(client, agent_headers, patient_payload):
    contact = {"name": "Mary Carter", "relationship": "Spouse", "phoneNumber": "5550001111"}

    response = await client.post("/patients", json=patient_payload(emergencyContact=contact), headers=agent_headers)

    assert response.status_code == 201
    assert response.json()["patient"]["emergencyContact"] == contact


async def test_future_date_of_birth_is_rejected(client, agent_headers, patient_payload):
    tomorrow = (date.today() + timedelta(days=1)).isoformat()

    response = await client.post("/patients", json=patient_payload(dateOfBirth=tomorrow), headers=agent_headers)

    assert response.status_code == 400
    assert response.json()["details"][0]["message"] == "Date of birth cannot be in the future"


async def test_duplicate_email_conflicts(client, agent_headers, create_patient, patient_payload):
    await create_patient()

    response = await client.post(
        "/patients", json=patient_payload(email="JOHN.CARTER@hospital.org"), headers=agent_headers
    )

    assert response.status_code == 409
    assert response.json()["error"] == "A patient with this email already exists"


async def test_status_change_is_idempotent(client, agent_headers, create_patient):
    patient = await create_patient()
    url = f"/patients/{patient['id']}/status"

    first = await client.patch(url, json={"status": "paused"}, headers=agent_headers)
    second = await client.patch(url, json={"status": "paused"}, headers=agent_headers)

    assert first.status_code == second.status_code == 200
    first_body = {k: v for k, v in first.json()["patient"].items() if k != "updatedAt"}
    second_body = {k: v for k, v in second.json()["patient"].items() if k != "updatedAt"}
    assert first_body == second_body
    assert second_body["status"] == "paused"


async def test_invalid_status_is_rejected(client, agent_headers, create_patient):
    patient = await create_patient()

    response = await client.patch(f"/patients/{patient['id']}/status", json={"status": "archived"}, headers=agent_headers)

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "status"


async def test_search_and_status_filters_combine(client, agent_headers, create_patient):
    await create_patient(name="John Smith", email="jsmith@hospital.org", mobileNumber="5550000001")
    await create_patient(name="Alice Walker", email="alice.johnson@hospital.org", mobileNumber="5550000002")
    paused = await create_patient(name="Johnny Paused", email="paused@hospital.org", mobileNumber="5550000003")
    await create_patient(name="Bob Stone", email="bob@hospital.org", mobileNumber="5550000004")
    await client.patch(f"/patients/{paused['id']}/status", json={"status": "paused"}, headers=agent_headers)

    response = await client.get("/patients", params={"status": "active", "search": "JOHN"}, headers=agent_headers)

    names = sorted(p["name"] for p in response.json()["patients"])
    assert names == ["Alice Walker", "John Smith"]


async def test_search_matches_mobile_number(client, agent_headers, create_patient):
    await create_patient()
    await create_patient(name="Other Person", email="other@hospital.org", mobileNumber="7770000000")

    response = await client.get("/patients", params={"search": "555123", "status": "all"}, headers=agent_headers)

    assert [p["name"] for p in response.json()["patients"]] == ["John Carter"]


async def test_patch_changes_only_given_fields(client, agent_headers, create_patient):
    patient = await create_patient(notes="Prefers morning calls")

    response = await client.patch(
        f"/patients/{patient['id']}", json={"address": "12 Harbor Road"}, headers=agent_headers
    )

    assert response.status_code == 200
    updated = response.json()["patient"]
    assert updated["address"] == "12 Harbor Road"
    assert updated["notes"] == "Prefers morning calls"
    assert updated["medications"] == patient["medications"]


@pytest.mark.parametrize("patch, field", [
    ({"medications": []}, "medications"),
    ({"medications": [{"name": "x", "dosage": "y", "times": [" "]}]}, "medications.0.times"),
    ({"emergencyContact": {"name": "Mary Carter", "phoneNumber": "5550001111"}}, "emergencyContact.relationship"),
])
async def test_patch_enforces_document_rules(client, agent_headers, create_patient, patch, field):
    patient = await create_patient()

    response = await client.patch(f"/patients/{patient['id']}", json=patch, headers=agent_headers)
    stored = await client.get(f"/patients/{patient['id']}", headers=agent_headers)

    assert response.status_code == 400
    assert field in [d["field"] for d in response.json()["details"]]
    assert stored.json()["patient"] == patient


async def test_put_replaces_the_document(client, agent_headers, create_patient, patient_payload):
    patient = await create_patient(notes="Old note", allergies=["Penicillin"])
    replacement = patient_payload(
        name="John A. Carter",
        medications=[{"name": "Aspirin", "dosage": "81mg", "times": ["07:30"]}],
    )

    response = await client.put(f"/patients/{patient['id']}", json=replacement, headers=agent_headers)

    assert response.status_code == 200
    updated = response.json()["patient"]
    assert updated["name"] == "John A. Carter"
    assert updated["notes"] is None
    assert updated["allergies"] == []
    assert [m["name"] for m in updated["medications"]] == ["Aspirin"]
    assert updated["createdBy"] == patient["createdBy"]


async def test_update_email_clash_conflicts(client, agent_headers, create_patient):
    await create_patient()
    other = await create_patient(name="Other Person", email="other@hospital.org")

    response = await client.patch(
        f"/patients/{other['id']}", json={"email": "john.carter@hospital.org"}, headers=agent_headers
    )

    assert response.status_code == 409


async def test_delete_patient(client, agent_headers, create_patient):
    patient = await create_patient()

    deleted = await client.delete(f"/patients/{patient['id']}", headers=agent_headers)
    missing = await client.get(f"/patients/{patient['id']}", headers=agent_headers)

    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Patient deleted successfully"}
    assert missing.status_code == 404
    assert missing.json() == {"error": "Patient not found"}
