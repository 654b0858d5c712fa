from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import OfficeLocation
from .repository import LocationRepository


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self) -> Optional[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, latitude, longitude, radius, address, is_active
                FROM office_locations
                WHERE is_active=1
                ORDER BY location_id DESC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return OfficeLocation(
                location_id=int(r["location_id"]),
                latitude=float(r["latitude"]),
                longitude=float(r["longitude"]),
                radius=int(r["radius"]),
                address=r["address"],
                is_active=bool(r["is_active"]),
            )

    def replace_active(self, *, latitude: float, longitude: float, radius: int, address: str) -> int:
        # Single transaction: db_cursor commits both statements or rolls both back.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE office_locations SET is_active=0 WHERE is_active=1")
            cur.execute(
                """
                INSERT INTO office_locations(latitude, longitude, radius, address, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (latitude, longitude, int(radius), address),
            )
            return int(cur.lastrowid)
