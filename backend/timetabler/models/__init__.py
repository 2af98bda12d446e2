from timetabler.models.course import Course  # noqa: F401
from timetabler.models.faculty import Faculty  # noqa: F401
from timetabler.models.room import Room  # noqa: F401
from timetabler.models.scheduling_preferences import SchedulingPreferencesRecord  # noqa: F401
from timetabler.models.student import Student  # noqa: F401
from timetabler.models.time_slot import TimeSlot, TimeSlotType  # noqa: F401
from timetabler.models.timetable import TimetableAssignment, UnscheduledSession  # noqa: F401
from timetabler.models.timetable_conflict_decision import (  # noqa: F401
    ConflictDecision,
    TimetableConflictDecision,
)
