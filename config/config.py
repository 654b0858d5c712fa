"""Settings shared by every environment; the environment modules override what differs."""
import os


def _flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "office_attendance")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Dev helpers
    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")

    ATTENDANCE = {
        "timezone": os.environ.get("ATTENDANCE_TIMEZONE", "Asia/Kolkata"),
        "work_start": os.environ.get("ATTENDANCE_WORK_START", "09:00"),
        "work_end": os.environ.get("ATTENDANCE_WORK_END", "17:00"),
        "late_threshold": os.environ.get("ATTENDANCE_LATE_THRESHOLD", "10:00"),
        "auto_close_day": _flag("ATTENDANCE_AUTO_CLOSE_DAY", "1"),
        "history_limit": int(os.environ.get("ATTENDANCE_HISTORY_LIMIT", "50")),
    }

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
