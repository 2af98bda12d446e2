from collections.abc import Sequence
from typing import Dict, List

from timetabler.schemas.conflict import ConflictDetail
from timetabler.schemas.settings import DAYS
from timetabler.schemas.timetable import AssignmentPayload, CoursePayload, SchedulingState

FACULTY_SUGGESTIONS = [
    "Reschedule one of the conflicting courses",
    "Assign a different faculty member",
    "Split the courses into different time slots",
]
ROOM_SUGGESTIONS = [
    "Assign different rooms to conflicting courses",
    "Reschedule one course to a different time",
    "Check if courses can be combined",
]
STUDENT_SUGGESTIONS = [
    "Reschedule one of the conflicting courses",
    "Remove student from one course",
    "Create separate sections for the course",
]
CAPACITY_SUGGESTIONS = [
    "Assign a larger room",
    "Split the course into multiple sections",
    "Reduce the number of enrolled students",
]


class ConflictService:
    """Scans a timetable cell by cell and reports clashes.

    Detection never mutates the state it is given and returns a new list on
    every call. Passes run faculty, room, student, then capacity; within a
    pass cells are visited Monday to Saturday and by slot start time, and
    groups are reported in first-seen order.
    """

    def __init__(self, state: SchedulingState, days: Sequence[str] = DAYS):
        self.state = state
        self.days = tuple(days)
        self.slots = state.class_slots()
        self.course_map = state.course_map()
        self.faculty_map = state.faculty_map()
        self.student_map = state.student_map()
        self.room_map = state.room_map()

    def detect_conflicts(self) -> List[ConflictDetail]:
        conflicts: List[ConflictDetail] = []
        conflicts.extend(self.detect_faculty_conflicts())
        conflicts.extend(self.detect_room_conflicts())
        conflicts.extend(self.detect_student_conflicts())
        conflicts.extend(self.detect_capacity_conflicts())
        return conflicts

    def _cells(self):
        for day in self.days:
            for slot in self.slots:
                assignments = self.state.assignments_for_slot(day, slot.id)
                if assignments:
                    yield day, slot, assignments

    def _course_name(self, assignment: AssignmentPayload) -> str:
        course = self.course_map.get(assignment.course_id)
        return course.name if course else assignment.course_id

    def detect_faculty_conflicts(self) -> List[ConflictDetail]:
        conflicts: List[ConflictDetail] = []
        for day, slot, assignments in self._cells():
            faculty_groups: Dict[str, List[tuple[AssignmentPayload, CoursePayload]]] = {}
            for assignment in assignments:
                course = self.course_map.get(assignment.course_id)
                if course and course.faculty_id:
                    faculty_groups.setdefault(course.faculty_id, []).append((assignment, course))

            for faculty_id, items in faculty_groups.items():
                if len(items) < 2:
                    continue
                member = self.faculty_map.get(faculty_id)
                faculty_name = member.name if member else faculty_id
                conflicts.append(ConflictDetail(
                    id=f"faculty-{day}-{slot.id}-{faculty_id}",
                    type="faculty_conflict",
                    title="Faculty Double Booking",
                    description=f"{faculty_name} is scheduled for multiple courses at the same time",
                    day=day,
                    slot_id=slot.id,
                    time_slot=slot.label,
                    faculty=faculty_name,
                    courses=[course.name for _, course in items],
                    assignment_ids=[assignment.id for assignment, _ in items],
                    suggestions=list(FACULTY_SUGGESTIONS),
                ))
        return conflicts

    def detect_room_conflicts(self) -> List[ConflictDetail]:
        conflicts: List[ConflictDetail] = []
        for day, slot, assignments in self._cells():
            room_groups: Dict[str, List[AssignmentPayload]] = {}
            for assignment in assignments:
                if assignment.room_id:
                    room_groups.setdefault(assignment.room_id, []).append(assignment)

            for room_id, items in room_groups.items():
                if len(items) < 2:
                    continue
                room = self.room_map.get(room_id)
                room_name = room.name if room else room_id
                conflicts.append(ConflictDetail(
                    id=f"room-{day}-{slot.id}-{room_id}",
                    type="room_conflict",
                    title="Room Double Booking",
                    description=f"{room_name} is booked for multiple courses simultaneously",
                    day=day,
                    slot_id=slot.id,
                    time_slot=slot.label,
                    room=room_name,
                    courses=[self._course_name(assignment) for assignment in items],
                    assignment_ids=[assignment.id for assignment in items],
                    suggestions=list(ROOM_SUGGESTIONS),
                ))
        return conflicts

    def detect_student_conflicts(self) -> List[ConflictDetail]:
        conflicts: List[ConflictDetail] = []
        for day, slot, assignments in self._cells():
            student_groups: Dict[str, List[tuple[AssignmentPayload, CoursePayload]]] = {}
            for assignment in assignments:
                course = self.course_map.get(assignment.course_id)
                if not course:
                    continue
                for student_id in course.student_ids:
                    student_groups.setdefault(student_id, []).append((assignment, course))

            for student_id, items in student_groups.items():
                if len(items) < 2:
                    continue
                student = self.student_map.get(student_id)
                student_name = student.name if student else student_id
                conflicts.append(ConflictDetail(
                    id=f"student-{day}-{slot.id}-{student_id}",
                    type="student_conflict",
                    title="Student Schedule Conflict",
                    description=f"{student_name} has overlapping courses",
                    day=day,
                    slot_id=slot.id,
                    time_slot=slot.label,
                    student=student_name,
                    courses=[course.name for _, course in items],
                    assignment_ids=[assignment.id for assignment, _ in items],
                    suggestions=list(STUDENT_SUGGESTIONS),
                ))
        return conflicts

    def detect_capacity_conflicts(self) -> List[ConflictDetail]:
        conflicts: List[ConflictDetail] = []
        for day, slot, assignments in self._cells():
            for assignment in assignments:
                course = self.course_map.get(assignment.course_id)
                room = self.room_map.get(assignment.room_id)
                if not course or not room:
                    continue
                student_count = course.roster_size
                if student_count <= room.capacity:
                    continue
                conflicts.append(ConflictDetail(
                    id=f"capacity-{day}-{slot.id}-{assignment.id}",
                    type="capacity_conflict",
                    title="Room Capacity Exceeded",
                    description=(
                        f"{course.name} has {student_count} students "
                        f"but {room.name} capacity is {room.capacity}"
                    ),
                    day=day,
                    slot_id=slot.id,
                    time_slot=slot.label,
                    course=course.name,
                    room=room.name,
                    courses=[course.name],
                    assignment_ids=[assignment.id],
                    student_count=student_count,
                    capacity=room.capacity,
                    suggestions=list(CAPACITY_SUGGESTIONS),
                ))
        return conflicts


def detect_conflicts(state: SchedulingState) -> List[ConflictDetail]:
    return ConflictService(state).detect_conflicts()


def count_auto_resolvable(conflicts: Sequence[ConflictDetail]) -> int:
    # Auto resolution only tallies room double bookings; nothing is moved.
    return sum(1 for conflict in conflicts if conflict.type == "room_conflict")
