"""
Unit Tests for SQLAlchemy Models

In-memory defaults and the storage-level constraints.
"""

from datetime import UTC, date, datetime
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from childcare.core.enums import AttendanceStatus, ChildStatus, Gender, ReportType, UserRole
from childcare.core.models import Attendance, Child, Notification, Report, User


class TestDefaults:
    def test_user_defaults(self):
        user = User(
            username="jane",
            email="jane@example.com",
            password_hash="x",
            full_name="Jane",
            role=UserRole.MANAGER,
            phone_number="+251911000000",
        )

        assert user.id is not None
        assert user.is_active is True
        assert user.created_at is not None

    def test_child_defaults(self):
        child = Child(
            first_name="Abebe",
            last_name="Kebede",
            date_of_birth=date(2021, 1, 1),
            gender=Gender.MALE,
            registration_number="REG-1",
            parent_id=uuid4(),
            emergency_contact={"name": "A", "relationship": "B", "phone_number": "+251911000002"},
        )

        assert child.status == ChildStatus.ACTIVE
        assert child.enrollment_date == datetime.now(UTC).date()

    def test_attendance_defaults_to_present(self):
        attendance = Attendance(date=date(2026, 1, 5), check_in_time=datetime.now(UTC))
        assert attendance.status == AttendanceStatus.PRESENT

    def test_notification_starts_unread(self):
        assert Notification(title="t", message="m").is_read is False

    def test_report_period(self):
        report = Report(
            type=ReportType.WEEKLY, period_start=date(2026, 1, 1), period_end=date(2026, 1, 7)
        )
        assert report.period == {"start_date": date(2026, 1, 1), "end_date": date(2026, 1, 7)}


class TestConstraints:
    async def test_one_attendance_per_child_per_day(self, db_session, make_user, make_child):
        parent = await make_user(UserRole.FAMILY)
        recorder = await make_user(UserRole.GUARDIAN)
        child = await make_child(parent, recorder)

        for hour in (8, 15):
            db_session.add(
                Attendance(
                    child_id=child.id,
                    date=date(2026, 2, 2),
                    check_in_time=datetime(2026, 2, 2, hour, tzinfo=UTC),
                    recorded_by=recorder.id,
                )
            )

        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()

    async def test_registration_number_unique(self, db_session, make_user, make_child):
        parent = await make_user(UserRole.FAMILY)
        await make_child(parent, registration_number="REG001")

        with pytest.raises(IntegrityError):
            await make_child(parent, registration_number="REG001")
        await db_session.rollback()

    async def test_username_unique(self, db_session, make_user):
        await make_user(UserRole.ADMIN, username="dup")

        with pytest.raises(IntegrityError):
            await make_user(UserRole.MANAGER, username="dup")
        await db_session.rollback()

    async def test_referenced_user_cannot_be_deleted(self, db_session, make_user, make_child):
        parent = await make_user(UserRole.FAMILY)
        await make_child(parent)

        await db_session.delete(parent)
        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()
