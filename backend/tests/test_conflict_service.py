from factories import make_course, make_slot, make_state
from timetabler.services.conflict_service import ConflictService, count_auto_resolvable, detect_conflicts


def test_detect_faculty_conflict():
    state = make_state(
        courses=[make_course("C1", name="Algorithms"), make_course("C2", name="Databases")],
        rooms=(("R1", "Room 1", 30), ("R2", "Room 2", 30)),
        cells=[
            ("Monday", "1", "C1:1", "C1", "R1"),
            ("Monday", "1", "C2:1", "C2", "R2"),
        ],
    )
    conflicts = detect_conflicts(state)

    assert len(conflicts) == 1
    conflict = conflicts[0]
    assert conflict.type == "faculty_conflict"
    assert conflict.faculty == "Dr. X"
    assert conflict.courses == ["Algorithms", "Databases"]
    assert conflict.description == "Dr. X is scheduled for multiple courses at the same time"
    assert conflict.time_slot == "Slot 1"
    assert conflict.assignment_ids == ["C1:1", "C2:1"]
    assert len(conflict.suggestions) == 3


def test_detect_room_conflict():
    state = make_state(
        courses=[make_course("C1", faculty_id="F1"), make_course("C2", faculty_id="F2")],
        faculty=(("F1", "Prof A"), ("F2", "Prof B")),
        cells=[
            ("Tuesday", "1", "C1:1", "C1", "R1"),
            ("Tuesday", "1", "C2:1", "C2", "R1"),
        ],
    )
    conflicts = detect_conflicts(state)

    assert [conflict.type for conflict in conflicts] == ["room_conflict"]
    assert conflicts[0].room == "Room 1"
    assert conflicts[0].description == "Room 1 is booked for multiple courses simultaneously"
    assert conflicts[0].id == "room-Tuesday-1-R1"


def test_detect_student_conflict_once_per_student():
    state = make_state(
        courses=[
            make_course("C1", faculty_id="F1", students=["S1", "S2", "S3"]),
            make_course("C2", faculty_id="F2", students=["S2", "S3"]),
        ],
        faculty=(("F1", "Prof A"), ("F2", "Prof B")),
        students=(("S2", "Asha"),),
        rooms=(("R1", "Room 1", 30), ("R2", "Room 2", 30)),
        cells=[
            ("Monday", "1", "C1:1", "C1", "R1"),
            ("Monday", "1", "C2:1", "C2", "R2"),
        ],
    )
    conflicts = detect_conflicts(state)

    assert [conflict.type for conflict in conflicts] == ["student_conflict", "student_conflict"]
    assert [conflict.student for conflict in conflicts] == ["Asha", "S3"]
    assert conflicts[0].courses == ["Course C1", "Course C2"]


def test_detect_capacity_conflict_per_assignment():
    state = make_state(
        courses=[
            make_course("C1", faculty_id="F1", students=[f"S{i}" for i in range(35)]),
            make_course("C2", faculty_id="F2", students=["S1"]),
        ],
        faculty=(("F1", "Prof A"), ("F2", "Prof B")),
        rooms=(("R1", "Room 1", 30), ("R2", "Room 2", 30)),
        cells=[
            ("Wednesday", "1", "C1:1", "C1", "R1"),
            ("Wednesday", "1", "C2:1", "C2", "R2"),
        ],
    )
    conflicts = ConflictService(state).detect_capacity_conflicts()

    assert len(conflicts) == 1
    assert conflicts[0].course == "Course C1"
    assert conflicts[0].student_count == 35
    assert conflicts[0].capacity == 30
    assert conflicts[0].description == "Course C1 has 35 students but Room 1 capacity is 30"


def test_no_capacity_conflicts_when_rooms_are_big_enough():
    state = make_state(
        courses=[make_course("C1", students=["S1", "S2"])],
        rooms=(("R1", "Room 1", 2),),
        cells=[("Monday", "1", "C1:1", "C1", "R1")],
    )

    assert detect_conflicts(state) == []


def test_no_conflicts_across_different_slots():
    state = make_state(
        courses=[make_course("C1"), make_course("C2")],
        slots=[make_slot("1", "09:00", "10:00"), make_slot("2", "10:00", "11:00")],
        cells=[
            ("Monday", "1", "C1:1", "C1", "R1"),
            ("Monday", "2", "C2:1", "C2", "R1"),
        ],
    )

    assert detect_conflicts(state) == []


def test_missing_references_fall_back_to_raw_ids():
    state = make_state(
        courses=[
            make_course("C1", faculty_id="ghost", students=["S9"]),
            make_course("C2", faculty_id="ghost", students=["S9"]),
        ],
        faculty=(),
        rooms=(),
        cells=[
            ("Friday", "1", "C1:1", "C1", "R404"),
            ("Friday", "1", "C2:1", "C2", "R404"),
            ("Friday", "1", "X:1", "unknown-course", "R404"),
        ],
    )
    conflicts = detect_conflicts(state)

    assert [conflict.type for conflict in conflicts] == ["faculty_conflict", "room_conflict", "student_conflict"]
    assert conflicts[0].faculty == "ghost"
    assert conflicts[1].room == "R404"
    assert conflicts[1].courses == ["Course C1", "Course C2", "unknown-course"]
    assert conflicts[2].student == "S9"


def test_conflicts_ordered_by_pass_then_day_then_slot():
    cells = []
    for day in ("Thursday", "Monday"):
        for slot_id in ("2", "1"):
            cells.append((day, slot_id, f"C1:{day}{slot_id}", "C1", "R1"))
            cells.append((day, slot_id, f"C2:{day}{slot_id}", "C2", "R1"))
    state = make_state(
        courses=[make_course("C1"), make_course("C2")],
        slots=[make_slot("2", "10:00", "11:00"), make_slot("1", "09:00", "10:00")],
        cells=cells,
    )
    conflicts = detect_conflicts(state)

    assert [(conflict.type, conflict.day, conflict.slot_id) for conflict in conflicts] == [
        ("faculty_conflict", "Monday", "1"),
        ("faculty_conflict", "Monday", "2"),
        ("faculty_conflict", "Thursday", "1"),
        ("faculty_conflict", "Thursday", "2"),
        ("room_conflict", "Monday", "1"),
        ("room_conflict", "Monday", "2"),
        ("room_conflict", "Thursday", "1"),
        ("room_conflict", "Thursday", "2"),
    ]


def test_detection_is_repeatable_and_leaves_state_untouched():
    state = make_state(
        courses=[make_course("C1", students=["S1"]), make_course("C2", students=["S1"])],
        cells=[
            ("Monday", "1", "C1:1", "C1", "R1"),
            ("Monday", "1", "C2:1", "C2", "R1"),
        ],
    )
    before = state.model_dump()

    first = detect_conflicts(state)
    second = detect_conflicts(state)

    assert first == second
    assert first is not second
    assert state.model_dump() == before


def test_assignments_in_break_slots_are_ignored():
    state = make_state(
        courses=[make_course("C1"), make_course("C2")],
        slots=[make_slot("1", "09:00", "10:00"), make_slot("lunch", "12:00", "13:00", slot_type="break")],
        cells=[
            ("Monday", "lunch", "C1:1", "C1", "R1"),
            ("Monday", "lunch", "C2:1", "C2", "R1"),
        ],
    )

    assert detect_conflicts(state) == []


def test_count_auto_resolvable_counts_room_conflicts_only():
    state = make_state(
        courses=[make_course("C1"), make_course("C2")],
        slots=[make_slot("1", "09:00", "10:00"), make_slot("2", "10:00", "11:00")],
        cells=[
            ("Monday", "1", "C1:1", "C1", "R1"),
            ("Monday", "1", "C2:1", "C2", "R1"),
            ("Monday", "2", "C1:2", "C1", "R1"),
            ("Monday", "2", "C2:2", "C2", "R1"),
        ],
    )
    conflicts = detect_conflicts(state)

    assert len(conflicts) == 4
    assert count_auto_resolvable(conflicts) == 2
