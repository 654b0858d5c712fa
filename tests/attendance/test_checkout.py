import pytest

from conftest import WORKDAY, local
from src.office_attendance.office_attendance.core.enums import AttendanceStatus, Audience, EventType
from src.office_attendance.office_attendance.core.exceptions import AlreadyCheckedOutError, NotCheckedInError


def test_checkout_without_record_is_rejected(service, attendance_repo):
    with pytest.raises(NotCheckedInError) as exc:
        service.check_out(1, now=local(WORKDAY, 17, 0))

    assert exc.value.message == "You must check in before checking out"
    assert attendance_repo.writes == 0


def test_checkout_of_placeholder_record_is_rejected(service, attendance_repo):
    attendance_repo.seed(user_id=1, work_date=WORKDAY, status=AttendanceStatus.ABSENT)

    with pytest.raises(NotCheckedInError):
        service.check_out(1, now=local(WORKDAY, 17, 0))


def test_checkout_after_auto_close_is_rejected(service):
    service.mark_attendance(1, source="web", now=local(WORKDAY, 9, 30))

    with pytest.raises(AlreadyCheckedOutError) as exc:
        service.check_out(1, now=local(WORKDAY, 16, 0))

    assert exc.value.message == "You have already checked out today"


def test_checkout_closes_open_day_and_keeps_status(make_service, notifier):
    service = make_service(auto_close_day=False)
    service.mark_attendance(1, source="web", now=local(WORKDAY, 10, 15))
    notifier.events.clear()

    record = service.check_out(1, now=local(WORKDAY, 18, 15))

    assert record.status == AttendanceStatus.LATE
    assert record.check_out == local(WORKDAY, 18, 15)
    assert record.working_hours == pytest.approx(8.0)
    assert [(e.event_type, e.audience) for e in notifier.events] == [
        (EventType.CHECK_OUT, Audience.ADMIN),
        (EventType.CHECK_OUT, Audience.USER),
    ]
    assert notifier.events[0].message == "Asha Rao checked out"
    assert notifier.events[1].data == {"working_hours": pytest.approx(8.0)}


def test_checkout_looks_up_today_in_requested_zone(make_service, attendance_repo):
    attendance_repo.seed(user_id=1, work_date=WORKDAY, check_in=local(WORKDAY, 9, 0), status=AttendanceStatus.PRESENT)
    service = make_service(auto_close_day=False)

    # 02:00 on the 4th in Bengaluru is still the 3rd in London.
    record = service.check_out(1, timezone="Europe/London", now=local(WORKDAY.replace(day=4), 2, 0))

    assert record.work_date == WORKDAY
    assert record.working_hours == pytest.approx(17.0)
