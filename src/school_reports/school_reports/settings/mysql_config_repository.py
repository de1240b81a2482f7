from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import ConfigRepository


class MySQLConfigRepository(ConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_value(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT config_value FROM system_config WHERE config_key=%s", (key,))
            r = fetchone(cur)
            if not r:
                return None
            return r.get("config_value")
