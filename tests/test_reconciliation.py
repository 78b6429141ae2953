from dataclasses import dataclass
from datetime import date, datetime, timedelta

from attendance_tracker.core.reconciliation import (
    DayStatus,
    WorkingDays,
    attendance_percentage,
    auto_generated_leaves,
    classify_day,
    merge_leave_entries,
    reconcile,
)


@dataclass
class Window:
    start_date: date
    end_date: date
    reason: str = ""


MON = date(2024, 1, 1)
FRI = date(2024, 1, 5)
SAT = date(2024, 1, 6)
SUN = date(2024, 1, 7)


def days(start, count):
    return [start + timedelta(days=i) for i in range(count)]


class TestWorkingDays:
    """Working-day enumeration"""

    def test_skips_weekends(self):
        assert list(WorkingDays(MON, date(2024, 1, 14))) == days(MON, 5) + days(date(2024, 1, 8), 5)

    def test_skips_holiday_window(self):
        holiday = Window(date(2024, 1, 2), date(2024, 1, 3))
        assert list(WorkingDays(MON, FRI, [holiday])) == [MON, date(2024, 1, 4), FRI]

    def test_start_after_end_is_empty(self):
        assert list(WorkingDays(FRI, MON)) == []

    def test_start_on_weekend_is_skipped(self):
        assert list(WorkingDays(SAT, date(2024, 1, 9))) == [date(2024, 1, 8), date(2024, 1, 9)]

    def test_sequence_can_be_iterated_again(self):
        working_days = WorkingDays(MON, FRI)
        assert list(working_days) == list(working_days)


class TestClassifyDay:
    """Per-day status"""

    now = datetime(2024, 1, 5, 10, 0)

    def test_attendance_beats_leave(self):
        leave = Window(MON, FRI)
        assert classify_day(MON, self.now, {MON}, [leave]) == DayStatus.PRESENT

    def test_leave_window(self):
        leave = Window(MON, date(2024, 1, 2))
        assert classify_day(date(2024, 1, 2), self.now, set(), [leave]) == DayStatus.ON_LEAVE

    def test_past_day_without_records_failed(self):
        assert classify_day(date(2024, 1, 4), self.now, set(), []) == DayStatus.FAILED_TO_MARK

    def test_today_before_cutoff_pending(self):
        assert classify_day(FRI, datetime(2024, 1, 5, 16, 59), set(), []) == DayStatus.PENDING

    def test_today_at_cutoff_failed(self):
        assert classify_day(FRI, datetime(2024, 1, 5, 17, 0), set(), []) == DayStatus.FAILED_TO_MARK


class TestReconcile:
    """Aggregated stats"""

    def test_nothing_recorded_after_cutoff(self):
        result = reconcile(MON, datetime(2024, 1, 5, 18, 0), [], [], [])

        assert result.stats.total_working_days == 5
        assert result.stats.present_days == 0
        assert result.stats.failed_to_mark == 5
        assert result.stats.leave_days == 5
        assert result.stats.attendance_percentage == 0
        assert result.failed_days == days(MON, 5)

    def test_today_before_cutoff_not_counted(self):
        result = reconcile(MON, datetime(2024, 1, 5, 10, 0), [], [], [])

        assert result.stats.total_working_days == 4
        assert result.stats.failed_to_mark == 4
        assert result.days[-1].status == DayStatus.PENDING

    def test_present_and_leave(self):
        result = reconcile(
            MON,
            datetime(2024, 1, 5, 10, 0),
            attendance_dates=days(MON, 3),
            leaves=[Window(date(2024, 1, 4), FRI)],
            holidays=[],
        )

        assert result.stats.total_working_days == 5
        assert result.stats.present_days == 3
        assert result.stats.leave_days == 2
        assert result.stats.failed_to_mark == 0
        assert result.stats.attendance_percentage == 60

    def test_weekend_attendance_not_counted(self):
        result = reconcile(MON, datetime(2024, 1, 8, 18, 0), [SAT, SUN], [], [])

        assert result.stats.total_working_days == 6
        assert result.stats.present_days == 0

    def test_holiday_attendance_not_counted(self):
        holiday = Window(date(2024, 1, 3), date(2024, 1, 3))
        result = reconcile(MON, datetime(2024, 1, 5, 18, 0), [date(2024, 1, 3)], [], [holiday])

        assert result.stats.total_working_days == 4
        assert result.stats.present_days == 0
        assert date(2024, 1, 3) not in [d.day for d in result.days]

    def test_counts_add_up(self):
        result = reconcile(
            MON,
            datetime(2024, 1, 19, 17, 30),
            attendance_dates=[MON, date(2024, 1, 9), date(2024, 1, 10), date(2024, 1, 19)],
            leaves=[Window(date(2024, 1, 11), date(2024, 1, 15))],
            holidays=[Window(date(2024, 1, 2), date(2024, 1, 3))],
        )
        stats = result.stats

        assert stats.present_days + stats.on_leave_days + stats.failed_to_mark == stats.total_working_days
        assert stats.leave_days - stats.failed_to_mark == stats.on_leave_days

    def test_new_hire_starting_today(self):
        result = reconcile(FRI, datetime(2024, 1, 5, 9, 30), [], [], [])

        assert result.stats.total_working_days == 0
        assert result.stats.attendance_percentage == 0

    def test_start_date_in_future(self):
        result = reconcile(date(2024, 2, 1), datetime(2024, 1, 5, 18, 0), [], [], [])

        assert result.days == []
        assert result.stats.total_working_days == 0


class TestPercentage:
    def test_rounds_half_up(self):
        assert attendance_percentage(1, 8) == 13
        assert attendance_percentage(2, 3) == 67
        assert attendance_percentage(1, 3) == 33

    def test_zero_working_days(self):
        assert attendance_percentage(0, 0) == 0


class TestLeaveEntries:
    def test_auto_generated_entries(self):
        entries = auto_generated_leaves("user-1", [MON])

        assert entries[0]["id"] == "failed-2024-01-01"
        assert entries[0]["status"] == "auto-generated"
        assert entries[0]["reason"] == "Failed to Mark Attendance"
        assert entries[0]["start_date"] == entries[0]["end_date"] == MON

    def test_merged_newest_first(self):
        stored = [{"id": "leave-1", "start_date": date(2024, 1, 3)}]
        generated = auto_generated_leaves("user-1", [MON, FRI])

        merged = merge_leave_entries(stored, generated)

        assert [entry["start_date"] for entry in merged] == [FRI, date(2024, 1, 3), MON]
