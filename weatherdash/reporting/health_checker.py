"""Health checker: DB connectivity, credential presence, provider reachability."""

import logging
import sqlite3

import httpx

from weatherdash.config.schema import AppConfig
from weatherdash.models.reporting import HealthStatus
from weatherdash.session.recent_searches import RecentSearches
from weatherdash.storage.kv_store import SqliteStore

logger = logging.getLogger(__name__)

CHECK_CITY = "London"


class HealthChecker:
    def __init__(self, conn: sqlite3.Connection, config: AppConfig):
        self.conn = conn
        self.config = config

    async def check(self) -> HealthStatus:
        db_ok = self._check_db()
        return HealthStatus(
            db_connected=db_ok,
            api_key_configured=bool(self.config.provider.api_key),
            provider_reachable=await self._check_provider(),
            recent_count=self._recent_count() if db_ok else 0,
        )

    def _check_db(self) -> bool:
        try:
            self.conn.execute("SELECT 1 FROM kv_store LIMIT 1")
            return True
        except sqlite3.Error:
            logger.exception("Database check failed")
            return False

    async def _check_provider(self) -> bool:
        """A 200 for a well-known city means the endpoint and key both work."""
        if not self.config.provider.api_key:
            return False
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                resp = await client.get(
                    f"{self.config.provider.base_url.rstrip('/')}/weather",
                    params={"q": CHECK_CITY, "appid": self.config.provider.api_key},
                )
            return resp.status_code == 200
        except httpx.RequestError as e:
            logger.warning("Provider unreachable: %s", e)
            return False

    def _recent_count(self) -> int:
        recent = RecentSearches(
            SqliteStore(self.conn),
            key=self.config.storage.recent_key,
            limit=self.config.session.max_recent,
        )
        return len(recent)
