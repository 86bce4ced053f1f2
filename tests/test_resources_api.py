"""
Symptom, supplement and health-metric endpoints: validation, ordering and
per-user isolation.
"""

import pytest

from models.symptom import Symptom


def _symptom(**overrides):
    payload = {
        "category": "Headache",
        "severity": 5,
        "description": "dull ache",
        "date": "2024-03-02",
        "mood": "Tired",
        "moodIntensity": 6,
    }
    payload.update(overrides)
    return payload


def _supplement(**overrides):
    payload = {
        "name": "Vitamin D",
        "dosage": "1000 IU",
        "frequency": "daily",
        "reminderEnabled": True,
        "reminderTime": "08:30",
    }
    payload.update(overrides)
    return payload


# symptoms


@pytest.mark.parametrize("severity", [1, 10])
def test_symptom_severity_bounds_accepted(alice, severity):
    resp = alice.post("/api/symptoms", json=_symptom(severity=severity))
    assert resp.status_code == 201
    body = resp.json()
    assert body["severity"] == severity
    assert body["moodIntensity"] == 6
    assert body["date"] == "2024-03-02T00:00:00"


@pytest.mark.parametrize("severity", [0, 11])
def test_symptom_severity_bounds_rejected(alice, db, severity):
    resp = alice.post("/api/symptoms", json=_symptom(severity=severity))
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation failed"
    assert [e["field"] for e in body["errors"]] == ["severity"]
    assert db.query(Symptom).count() == 0


def test_symptom_accepts_snake_case_keys(alice):
    payload = _symptom()
    payload["mood_intensity"] = payload.pop("moodIntensity")
    assert alice.post("/api/symptoms", json=payload).status_code == 201


def test_symptoms_listed_by_date_ascending(alice):
    for d in ("2024-03-05", "2024-03-01", "2024-03-03"):
        assert alice.post("/api/symptoms", json=_symptom(date=d)).status_code == 201
    dates = [s["date"] for s in alice.get("/api/symptoms").json()]
    assert [d[:10] for d in dates] == ["2024-03-01", "2024-03-03", "2024-03-05"]


def test_symptom_accepts_iso_timestamp(alice):
    resp = alice.post("/api/symptoms", json=_symptom(date="2024-03-02T14:37:21.123Z"))
    assert resp.status_code == 201
    assert resp.json()["date"].startswith("2024-03-02T14:37:21.123")


def test_symptom_timestamps_ordered_within_a_day(alice):
    for ts in ("2024-03-02T18:00:00Z", "2024-03-02T09:30:00+02:00", "2024-03-02T12:00:00Z"):
        assert alice.post("/api/symptoms", json=_symptom(date=ts)).status_code == 201
    dates = [s["date"][:16] for s in alice.get("/api/symptoms").json()]
    assert dates == ["2024-03-02T07:30", "2024-03-02T12:00", "2024-03-02T18:00"]


def test_symptoms_are_private(alice, bob):
    alice.post("/api/symptoms", json=_symptom())
    assert bob.get("/api/symptoms").json() == []
    assert len(alice.get("/api/symptoms").json()) == 1


def test_delete_symptom(alice):
    sid = alice.post("/api/symptoms", json=_symptom()).json()["id"]
    resp = alice.delete(f"/api/symptoms/{sid}")
    assert resp.status_code == 200
    assert alice.get("/api/symptoms").json() == []
    assert alice.delete(f"/api/symptoms/{sid}").status_code == 404


def test_delete_someone_elses_symptom(alice, bob, db):
    sid = alice.post("/api/symptoms", json=_symptom()).json()["id"]
    resp = bob.delete(f"/api/symptoms/{sid}")
    assert resp.status_code == 404
    assert db.get(Symptom, sid) is not None
    assert [s["id"] for s in alice.get("/api/symptoms").json()] == [sid]


# supplements


def test_create_supplement(alice):
    resp = alice.post("/api/supplements", json=_supplement(notes="with food"))
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Vitamin D"
    assert body["reminderEnabled"] is True
    assert body["reminderTime"] == "08:30"
    assert body["notes"] == "with food"
    assert body["lastTaken"] is None


def test_supplement_name_unique_per_user(alice, bob):
    assert alice.post("/api/supplements", json=_supplement()).status_code == 201
    resp = alice.post("/api/supplements", json=_supplement(dosage="2000 IU"))
    assert resp.status_code == 409
    assert resp.json()["message"] == "Supplement with this name already exists"
    assert len(alice.get("/api/supplements").json()) == 1

    assert bob.post("/api/supplements", json=_supplement()).status_code == 201


def test_supplement_duplicate_caught_by_constraint(alice, monkeypatch):
    import services.supplement_service as supplement_service

    assert alice.post("/api/supplements", json=_supplement()).status_code == 201
    # A concurrent create that passed the check before this one committed.
    monkeypatch.setattr(supplement_service, "_name_taken", lambda db, user_id, name: False)
    resp = alice.post("/api/supplements", json=_supplement())
    assert resp.status_code == 409
    assert resp.json() == {"message": "Supplement with this name already exists"}
    assert len(alice.get("/api/supplements").json()) == 1


def test_supplement_reminder_time_cleared_when_disabled(alice):
    body = alice.post("/api/supplements", json=_supplement(reminderEnabled=False)).json()
    assert body["reminderTime"] is None


def test_supplement_validation(alice):
    resp = alice.post("/api/supplements", json=_supplement(name="", reminderTime="25:00"))
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["errors"]}
    assert {"name", "reminderTime"} <= fields


def test_take_supplement(alice, bob):
    sid = alice.post("/api/supplements", json=_supplement()).json()["id"]
    resp = alice.post(f"/api/supplements/{sid}/take")
    assert resp.status_code == 200
    assert resp.json()["lastTaken"] is not None
    assert bob.post(f"/api/supplements/{sid}/take").status_code == 404


def test_delete_supplement(alice, bob):
    sid = alice.post("/api/supplements", json=_supplement()).json()["id"]
    assert bob.delete(f"/api/supplements/{sid}").status_code == 404
    assert alice.delete(f"/api/supplements/{sid}").status_code == 200
    assert alice.get("/api/supplements").json() == []
    # Name is free again once deleted.
    assert alice.post("/api/supplements", json=_supplement()).status_code == 201


# health metrics


def test_health_metrics_ordering_and_filter(alice, bob):
    for metric in (
        {"type": "steps", "value": 8000, "date": "2024-03-03T20:00:00"},
        {"type": "heart_rate", "value": 64, "date": "2024-03-01T07:00:00", "source": "watch"},
        {"type": "sleep", "value": 7.5, "date": "2024-03-02T07:00:00"},
    ):
        assert alice.post("/api/health-metrics", json=metric).status_code == 201

    body = alice.get("/api/health-metrics").json()
    assert [m["type"] for m in body] == ["heart_rate", "sleep", "steps"]
    assert body[0]["source"] == "watch"
    assert body[1]["source"] == "manual"

    only_sleep = alice.get("/api/health-metrics", params={"type": "sleep"}).json()
    assert [m["value"] for m in only_sleep] == [7.5]

    assert bob.get("/api/health-metrics").json() == []


def test_health_metric_validation(alice):
    resp = alice.post("/api/health-metrics", json={"type": "blood_pressure", "value": 120})
    assert resp.status_code == 400
    resp = alice.post("/api/health-metrics", json={"type": "steps", "value": -1})
    assert resp.status_code == 400
    assert alice.get("/api/health-metrics", params={"type": "weight"}).status_code == 400


def test_delete_health_metric(alice, bob):
    mid = alice.post("/api/health-metrics", json={"type": "steps", "value": 1200}).json()["id"]
    assert bob.delete(f"/api/health-metrics/{mid}").status_code == 404
    assert alice.delete(f"/api/health-metrics/{mid}").status_code == 200
    assert alice.get("/api/health-metrics").json() == []
