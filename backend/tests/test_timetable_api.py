from sqlalchemy import select

from timetabler.models.timetable import TimetableAssignment


def create_foundation(client, *, sessions=2, roster=("S1",), capacity=30):
    faculty = client.post("/api/faculty/", json={"id": "F1", "name": "Dr. X", "department": "CSE"})
    assert faculty.status_code == 201
    for student_id in roster:
        student = client.post("/api/students/", json={"id": student_id, "name": f"Student {student_id}"})
        assert student.status_code == 201
    room = client.post("/api/rooms/", json={"id": "R1", "name": "LH-101", "capacity": capacity})
    assert room.status_code == 201
    course = client.post(
        "/api/courses/",
        json={
            "id": "C1",
            "name": "Algorithms",
            "sessions_per_week": sessions,
            "faculty_id": "F1",
            "student_ids": list(roster),
        },
    )
    assert course.status_code == 201
    return course.json()


def test_generate_requires_courses_faculty_and_rooms(client):
    response = client.post("/api/timetable/generate")
    assert response.status_code == 400
    assert response.json()["message"] == "No courses available. Please add courses first."


def test_generate_places_sessions_and_reports_no_conflicts(client):
    create_foundation(client, sessions=2)

    response = client.post("/api/timetable/generate", json={"random_seed": 7})
    assert response.status_code == 200
    body = response.json()
    assert body["total_sessions"] == 2
    assert body["scheduled_sessions"] == 2
    assert body["efficiency"] == 100
    assert body["unscheduled"] == []
    assert body["conflicts"] == []
    assert body["timetable"]["Monday"]["1"] == [{"id": "C1:1", "course_id": "C1", "room_id": "R1"}]
    assert body["timetable"]["Monday"]["2"] == [{"id": "C1:2", "course_id": "C1", "room_id": "R1"}]

    grid = client.get("/api/timetable").json()
    assert grid["days"][0] == "Monday"
    assert [slot["id"] for slot in grid["class_slots"]] == ["1", "2", "3", "4", "5", "6", "7", "8"]
    assert grid["timetable"]["Monday"]["1"][0]["course_id"] == "C1"


def test_regenerate_discards_previous_assignments(client, db_session):
    create_foundation(client, sessions=2)
    client.post("/api/timetable/generate")
    client.put("/api/courses/C1", json={"sessions_per_week": 1})
    client.post("/api/timetable/generate")

    rows = db_session.execute(select(TimetableAssignment)).scalars().all()
    assert [row.id for row in rows] == ["C1:1"]


def test_oversized_course_reports_capacity_conflict(client):
    create_foundation(client, sessions=1, roster=[f"S{i}" for i in range(35)], capacity=30)

    body = client.post("/api/timetable/generate").json()
    assert body["scheduled_sessions"] == 1
    assert [conflict["type"] for conflict in body["conflicts"]] == ["capacity_conflict"]
    assert body["conflicts"][0]["student_count"] == 35
    assert body["conflicts"][0]["capacity"] == 30


def test_crud_validation(client):
    create_foundation(client)

    duplicate = client.post("/api/rooms/", json={"id": "R1", "name": "Other", "capacity": 10})
    assert duplicate.status_code == 409

    orphan = client.post(
        "/api/courses/",
        json={"id": "C2", "name": "Orphan", "sessions_per_week": 1, "faculty_id": "nobody"},
    )
    assert orphan.status_code == 400

    updated = client.put("/api/courses/C1", json={"student_ids": ["S1", "S1", " S2 "]})
    assert updated.status_code == 200
    assert updated.json()["student_ids"] == ["S1", "S2"]

    assert client.delete("/api/students/S1").status_code == 200
    assert client.delete("/api/students/S1").status_code == 404
    assert client.put("/api/rooms/missing", json={"capacity": 5}).status_code == 404
    assert [room["id"] for room in client.get("/api/rooms/").json()] == ["R1"]


def test_time_slots_are_seeded_and_editable(client):
    slots = client.get("/api/time-slots/").json()
    assert len(slots) == 12
    assert [slot["type"] for slot in slots].count("break") == 4

    created = client.post(
        "/api/time-slots/",
        json={"id": "9", "start_time": "16:15", "end_time": "17:00", "label": "Period 9", "type": "class"},
    )
    assert created.status_code == 201

    bad_order = client.put("/api/time-slots/9", json={"end_time": "16:00"})
    assert bad_order.status_code == 400

    relabelled = client.put("/api/time-slots/9", json={"label": "Evening", "type": "break"})
    assert relabelled.status_code == 200
    assert relabelled.json()["type"] == "break"

    assert client.delete("/api/time-slots/9").status_code == 200


def test_scheduling_preferences_round_trip(client):
    assert client.get("/api/settings/scheduling").json() == {
        "strict_capacity_check": True,
        "allow_overlapping_breaks": False,
    }
    response = client.put("/api/settings/scheduling", json={"strict_capacity_check": False})
    assert response.status_code == 200
    assert client.get("/api/settings/scheduling").json()["strict_capacity_check"] is False


def test_dashboard_reports_scheduled_percentage(client):
    create_foundation(client, sessions=50)
    client.post("/api/timetable/generate")

    dashboard = client.get("/api/timetable/dashboard").json()
    assert dashboard["course_count"] == 1
    assert dashboard["room_count"] == 1
    assert dashboard["total_sessions"] == 50
    assert dashboard["unscheduled_count"] == 2
    assert dashboard["scheduled_percentage"] == 96
