"""Supabase (PostgREST) journal store.

Thin wrapper around the ``/rest/v1`` HTTP API with API-key auth.
No external dependencies beyond the standard library.
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from datetime import date
from typing import Any

from loguru import logger

from daybook.core.exceptions import DataProcessingError, PersistenceError
from daybook.journal.models import JournalEntry
from daybook.journal.store import check_insertable

DEFAULT_TABLE = "journals"


class SupabaseJournalStore:
    """JournalStore backed by a Supabase table of journal records."""

    def __init__(self, url: str, api_key: str, table: str = DEFAULT_TABLE, timeout: int = 15):
        if not url or not api_key:
            raise ValueError("url and api_key are required")
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout = timeout

    @property
    def _endpoint(self) -> str:
        return f"{self.url}/rest/v1/{urllib.parse.quote(self.table)}"

    def _request(
        self,
        method: str,
        *,
        params: list[tuple[str, str]] | None = None,
        payload: Any = None,
        prefer: str | None = None,
    ) -> Any:
        url = self._endpoint
        if params:
            url = f"{url}?{urllib.parse.urlencode(params)}"

        headers: dict[str, str] = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        data = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(payload).encode("utf-8")
        if prefer:
            headers["Prefer"] = prefer

        req = urllib.request.Request(url=url, data=data, method=method.upper(), headers=headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="ignore") if hasattr(e, "read") else ""
            raise PersistenceError(f"Supabase {e.code}: {body or e.reason}") from e
        except urllib.error.URLError as e:
            raise PersistenceError(f"Supabase request failed: {e}") from e
        except (TimeoutError, OSError, http.client.HTTPException) as e:
            # Raised by resp.read() once the response has started
            raise PersistenceError(f"Supabase request failed: {e!r}") from e

        if not raw:
            return []
        try:
            return json.loads(raw.decode("utf-8", errors="ignore"))
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Supabase returned non-JSON response: {raw[:200]!r}") from e

    def _to_entries(self, rows: Any) -> list[JournalEntry]:
        if not isinstance(rows, list):
            raise PersistenceError(f"Expected a list of rows from Supabase, got {type(rows).__name__}")
        entries = []
        for row in rows:
            try:
                entries.append(JournalEntry.from_record(row))
            except DataProcessingError as e:
                logger.warning(f"Skipping Supabase row: {e}")
        return entries

    def query_entries(self, start: date, end: date) -> list[JournalEntry]:
        rows = self._request(
            "GET",
            params=[
                ("select", "*"),
                ("date", f"gte.{start.isoformat()}"),
                ("date", f"lte.{end.isoformat()}"),
                ("order", "created_at.desc"),
            ],
        )
        entries = self._to_entries(rows)
        logger.debug(f"Fetched {len(entries)} entries for {start}..{end}")
        return entries

    def get_entry(self, entry_id: str) -> JournalEntry | None:
        rows = self._request("GET", params=[("select", "*"), ("id", f"eq.{entry_id}"), ("limit", "1")])
        entries = self._to_entries(rows)
        return entries[0] if entries else None

    def insert_entry(self, entry: JournalEntry) -> JournalEntry:
        check_insertable(entry)
        record = entry.to_record()
        # Let the database assign id and created_at
        record.pop("id", None)
        record.pop("created_at", None)

        rows = self._request("POST", payload=record, prefer="return=representation")
        entries = self._to_entries(rows)
        if not entries:
            raise PersistenceError("Supabase did not return the inserted entry")
        logger.info(f"Saved journal entry {entries[0].id} for {entries[0].date}")
        return entries[0]
