"""Supabase REST adapter - HTTP client for task rows."""

import logging

import requests

from taskcal.config import Config, load_config
from taskcal.core.tasks import Task
from taskcal.errors import AuthenticationError, BackendError

logger = logging.getLogger(__name__)


class SupabaseTaskAdapter:
    """
    Supabase (PostgREST) task adapter.

    Implements TaskRepository protocol. Handles auth headers and API calls.
    No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, timeout: int = 30):
        self.config = config or load_config()
        self.timeout = timeout
        self._session = requests.Session()

    @property
    def _table_url(self) -> str:
        return f"{self.config.supabase_url}/rest/v1/{self.config.supabase_table}"

    def _headers(self) -> dict:
        if not self.config.supabase_url or not self.config.supabase_key:
            raise AuthenticationError(
                "Missing Supabase credentials. Set SUPABASE_URL and SUPABASE_KEY in taskcal.conf"
            )
        return {
            "apikey": self.config.supabase_key,
            "Authorization": f"Bearer {self.config.supabase_key}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, params: dict, json_body: dict | None = None) -> list:
        """Make an authenticated request against the task table."""
        headers = self._headers()
        if method == "PATCH":
            headers["Prefer"] = "return=representation"
        try:
            resp = self._session.request(
                method,
                self._table_url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Supabase request failed: {e}")
            raise BackendError(f"Supabase request failed: {e}") from e

        if resp.status_code in (401, 403):
            raise AuthenticationError(f"Supabase rejected credentials: {resp.text}")
        if not resp.ok:
            logger.error(f"Supabase {method} returned {resp.status_code}: {resp.text}")
            raise BackendError(f"Supabase {method} failed ({resp.status_code}): {resp.text}")

        try:
            return resp.json()
        except ValueError as e:
            raise BackendError(f"Invalid JSON from Supabase: {e}") from e

    def fetch_all(self) -> list[Task]:
        """Fetch every task row."""
        return [Task.from_record(row) for row in self._request("GET", {"select": "*"})]

    def fetch(self, task_id: str) -> Task | None:
        rows = self._request("GET", {"select": "*", "id": f"eq.{task_id}"})
        return Task.from_record(rows[0]) if rows else None

    def update(self, task_id: str, changes: dict) -> None:
        """Patch columns on one task row."""
        rows = self._request("PATCH", {"id": f"eq.{task_id}"}, changes)
        if not rows:
            raise BackendError(f"No task with id {task_id} in {self.config.supabase_table}")
