"""
Unit Tests for Report Aggregation

Counting helpers are pure; period collection and report generation run
against the test database.
"""

from datetime import UTC, date, datetime
from types import SimpleNamespace

from sqlalchemy import func, select

from childcare.core.enums import AttendanceStatus, EvaluationCategory, ReportType, UserRole
from childcare.core.models import Attendance, Evaluation, Report
from childcare.reporting import (
    collect_period,
    count_by_category,
    count_by_status,
    generate_monthly_summary,
    generate_weekly_report,
    summarize_attendance,
)


def _attendance(status: AttendanceStatus) -> SimpleNamespace:
    return SimpleNamespace(status=status)


class TestCounting:
    def test_summarize_empty(self):
        assert summarize_attendance([]) == {
            "total_days": 0,
            "present_days": 0,
            "absent_days": 0,
            "late_arrivals": 0,
        }

    def test_summarize_mixed(self):
        records = [
            _attendance(AttendanceStatus.PRESENT),
            _attendance(AttendanceStatus.PRESENT),
            _attendance(AttendanceStatus.LATE),
            _attendance(AttendanceStatus.ABSENT),
        ]

        summary = summarize_attendance(records)

        assert summary == {
            "total_days": 4,
            "present_days": 2,
            "absent_days": 1,
            "late_arrivals": 1,
        }
        assert summary["total_days"] == (
            summary["present_days"] + summary["absent_days"] + summary["late_arrivals"]
        )

    def test_summarize_accepts_raw_values(self):
        assert summarize_attendance([SimpleNamespace(status="LATE")])["late_arrivals"] == 1

    def test_count_by_status(self):
        records = [_attendance(AttendanceStatus.ABSENT), _attendance(AttendanceStatus.LATE)]

        assert count_by_status(records) == {"present": 0, "absent": 1, "late": 1}

    def test_count_by_category_lists_every_category(self):
        evaluations = [
            SimpleNamespace(category=EvaluationCategory.SOCIAL),
            SimpleNamespace(category=EvaluationCategory.SOCIAL),
            SimpleNamespace(category=EvaluationCategory.OTHER),
        ]

        counts = count_by_category(evaluations)

        assert counts == {
            "physical": 0,
            "cognitive": 0,
            "social": 2,
            "emotional": 0,
            "language": 0,
            "other": 1,
        }


class TestPeriodQueries:
    async def _seed(self, db_session, child, recorder):
        for day, status in [
            (date(2026, 3, 1), AttendanceStatus.PRESENT),
            (date(2026, 3, 7), AttendanceStatus.LATE),
            (date(2026, 3, 8), AttendanceStatus.ABSENT),
        ]:
            db_session.add(
                Attendance(
                    child_id=child.id,
                    date=day,
                    check_in_time=datetime(day.year, day.month, day.day, 8, tzinfo=UTC),
                    status=status,
                    recorded_by=recorder.id,
                )
            )
        db_session.add(
            Evaluation(
                child_id=child.id,
                evaluator_id=recorder.id,
                date=date(2026, 3, 7),
                category=EvaluationCategory.LANGUAGE,
                observation="Uses full sentences",
                attachments=[],
            )
        )
        await db_session.commit()

    async def test_end_day_is_inclusive(self, db_session, make_user, make_child):
        parent = await make_user(UserRole.FAMILY)
        guardian = await make_user(UserRole.GUARDIAN)
        child = await make_child(parent, guardian)
        await self._seed(db_session, child, guardian)

        records = await collect_period(db_session, date(2026, 3, 1), date(2026, 3, 7))

        assert [a.date for a in records.attendance] == [date(2026, 3, 1), date(2026, 3, 7)]
        assert len(records.evaluations) == 1

    async def test_weekly_report_is_persisted(self, db_session, make_user, make_child):
        parent = await make_user(UserRole.FAMILY)
        manager = await make_user(UserRole.MANAGER)
        child = await make_child(parent)
        await self._seed(db_session, child, manager)

        report, records = await generate_weekly_report(
            db_session, child, date(2026, 3, 1), date(2026, 3, 7), generated_by=manager.id
        )

        assert report.type == ReportType.WEEKLY
        assert report.child_id == child.id
        assert report.period == {"start_date": date(2026, 3, 1), "end_date": date(2026, 3, 7)}
        assert report.data["attendance"] == {
            "total_days": 2,
            "present_days": 1,
            "absent_days": 0,
            "late_arrivals": 1,
        }
        assert report.data["evaluations"] == [str(records.evaluations[0].id)]
        assert report.data["activities"] == []
        assert report.data["health_incidents"] == []

        stored = await db_session.scalar(select(func.count()).select_from(Report))
        assert stored == 1

    async def test_monthly_summary_is_not_persisted(self, db_session, make_user, make_child):
        parent = await make_user(UserRole.FAMILY)
        manager = await make_user(UserRole.MANAGER)
        child = await make_child(parent)
        await self._seed(db_session, child, manager)

        summary = await generate_monthly_summary(db_session, date(2026, 3, 1), date(2026, 3, 31))

        assert summary["type"] == ReportType.MONTHLY
        assert summary["statistics"]["total_children"] == 1
        assert summary["statistics"]["total_attendance_records"] == 3
        assert summary["statistics"]["attendance_by_status"] == {
            "present": 1,
            "absent": 1,
            "late": 1,
        }
        assert summary["statistics"]["evaluations_by_category"]["language"] == 1

        stored = await db_session.scalar(select(func.count()).select_from(Report))
        assert stored == 0
