"""Example: drive the attendance service directly (without Flask).

Controllers are a thin layer; the admission rules live in AttendanceService.
"""

import importlib

from config import get_settings_module

from src.office_attendance.office_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, attendance_config=settings.ATTENDANCE)

    result = container.attendance_service.mark_attendance(1, source="web")
    print(result.message, result.record.to_dict())

    stats = container.attendance_service.get_stats()
    print(stats.to_dict())


if __name__ == "__main__":
    main()
