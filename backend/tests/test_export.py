import pytest

from factories import make_course, make_slot, make_state
from timetabler.core.exceptions import ResourceNotFoundError, SchedulerError
from timetabler.services import export


def build_state():
    return make_state(
        courses=[
            make_course("C1", faculty_id="F1", students=("S1", "S2"), name="Algorithms"),
            make_course("C2", faculty_id="F2", students=("S2",), name="Databases"),
        ],
        faculty=(("F1", "Dr. X"), ("F2", "Dr. Y")),
        students=(("S1", "Asha"), ("S2", "Ben")),
        rooms=(("R1", "LH-101", 60), ("R2", "LH-102", 40)),
        slots=[
            make_slot("1", "08:50", "09:40"),
            make_slot("2", "09:40", "10:30"),
            make_slot("break1", "10:30", "10:45", "break"),
        ],
        cells=[
            ("Monday", "1", "C1:1", "C1", "R1"),
            ("Tuesday", "2", "C2:1", "C2", "R2"),
            ("Friday", "2", "C1:2", "C1", "gone"),
        ],
    )


def test_master_timetable_lists_every_day():
    nested = export.master_timetable(build_state())
    assert list(nested) == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
    assert nested["Monday"] == {"1": [{"id": "C1:1", "course_id": "C1", "room_id": "R1"}]}
    assert nested["Saturday"] == {}


def test_individual_schedule_filters_by_entity():
    state = build_state()

    faculty = export.individual_schedule(state, "faculty", "F2")
    assert faculty["Tuesday"]["2"][0].course_id == "C2"
    assert faculty["Monday"] == {}

    student = export.individual_schedule(state, "student", "S2")
    assert [a.id for day in student.values() for cell in day.values() for a in cell] == ["C1:1", "C2:1", "C1:2"]

    room = export.individual_schedule(state, "room", "R1")
    assert list(room["Monday"]) == ["1"]
    assert room["Friday"] == {}


def test_faculty_csv_layout():
    content = export.entity_timetable_csv(build_state(), "faculty", "F1")
    lines = content.splitlines()
    assert lines[0] == "Time,Monday,Tuesday,Wednesday,Thursday,Friday,Saturday"
    assert lines[1] == '"Slot 1","Algorithms (Room: LH-101)","","","","",""'
    assert lines[2] == '"Slot 2","","","","","Algorithms (Room: TBA)",""'
    assert len(lines) == 3


def test_student_and_room_csv_cells():
    state = build_state()
    student = export.entity_timetable_csv(state, "student", "S2").splitlines()
    assert '"Databases - Dr. Y (Room: LH-102)"' in student[2]

    room = export.entity_timetable_csv(state, "room", "R2").splitlines()
    assert '"Databases - Dr. Y (1 students)"' in room[2]


def test_unknown_view_or_entity_is_rejected():
    state = build_state()
    with pytest.raises(SchedulerError):
        export.entity_timetable_csv(state, "department", "CSE")
    with pytest.raises(ResourceNotFoundError):
        export.entity_timetable_csv(state, "room", "R9")


def test_export_endpoints(client):
    client.post("/api/faculty/", json={"id": "F1", "name": "Dr. X"})
    client.post("/api/rooms/", json={"id": "R1", "name": "LH-101", "capacity": 40})
    client.post(
        "/api/courses/",
        json={"id": "C1", "name": "Algorithms", "sessions_per_week": 1, "faculty_id": "F1"},
    )
    client.post("/api/timetable/generate")

    master = client.get("/api/export/timetable").json()
    assert master["Monday"]["1"][0]["course_id"] == "C1"

    csv_response = client.get("/api/export/faculty/F1")
    assert csv_response.status_code == 200
    assert csv_response.headers["content-type"].startswith("text/csv")
    assert "attachment" in csv_response.headers["content-disposition"]
    assert '"Period 1 (8:50-9:40 AM)","Algorithms (Room: LH-101)"' in csv_response.text

    assert client.get("/api/export/room/R9").status_code == 404
    assert client.get("/api/export/building/B1").status_code == 400

    conflicts = client.get("/api/export/conflicts").json()
    assert conflicts["total_conflicts"] == 0

    everything = client.get("/api/export/all").json()
    assert [course["id"] for course in everything["courses"]] == ["C1"]
    assert len(everything["time_slots"]) == 12
    assert everything["unscheduled"] == []


def test_bulk_timetables_hold_one_schedule_per_entity():
    state = build_state()
    document = export.bulk_timetables(state, "faculty")

    assert document["export_type"] == "All Faculty Timetables"
    assert document["total_faculty"] == 2
    assert [row["id"] for row in document["data"]] == ["F1", "F2"]
    assert document["data"][0]["department"] == "N/A"
    assert document["data"][0]["schedule"] == export.entity_timetable_csv(state, "faculty", "F1")

    rooms = export.bulk_timetables(state, "room")
    assert rooms["total_rooms"] == 2
    assert rooms["data"][1]["capacity"] == 40


def test_bulk_timetables_reject_empty_lists_and_unknown_views():
    state = make_state(faculty=(), rooms=())
    with pytest.raises(SchedulerError, match="No faculty members available to export"):
        export.bulk_timetables(state, "faculty")
    with pytest.raises(SchedulerError, match="No students available to export"):
        export.bulk_timetables(state, "student")
    with pytest.raises(SchedulerError):
        export.bulk_timetables(state, "building")


def test_entity_csv_download_accepts_non_ascii_ids(client):
    client.post("/api/faculty/", json={"id": "F1", "name": "Dr. X"})
    client.post("/api/rooms/", json={"id": "R1", "name": "LH-101", "capacity": 40})
    client.post("/api/students/", json={"id": "Ş1", "name": "Şule"})
    client.post(
        "/api/courses/",
        json={"id": "C1", "name": "Algorithms", "sessions_per_week": 1, "faculty_id": "F1", "student_ids": ["Ş1"]},
    )
    client.post("/api/timetable/generate")

    response = client.get("/api/export/student/Ş1")
    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert 'filename="student-_1-timetable-' in disposition
    assert "filename*=UTF-8''student-%C5%9E1-timetable-" in disposition
    assert '"Algorithms - Dr. X (Room: LH-101)"' in response.text


def test_bulk_export_endpoint(client):
    empty = client.get("/api/export/student")
    assert empty.status_code == 400
    assert empty.json()["message"] == "No students available to export"

    client.post("/api/students/", json={"id": "S1", "name": "Asha"})
    document = client.get("/api/export/student").json()
    assert document["export_type"] == "All Student Timetables"
    assert document["total_students"] == 1
    assert document["data"][0]["courses"] == []
    assert document["data"][0]["schedule"].startswith("Time,Monday")

    assert client.get("/api/export/building").status_code == 400
