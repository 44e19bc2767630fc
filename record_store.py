# record_store.py
import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx


class StoreError(Exception):
    """A storage request was rejected or could not be completed."""


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_columns(columns: str) -> Optional[List[str]]:
    cols = [c.strip() for c in (columns or "*").split(",") if c.strip()]
    if not cols or cols == ["*"]:
        return None
    return cols


class MemoryRecordStore:
    """
    In-memory table store with the same query surface as the Supabase one.
    Good for local runs and tests; nothing survives a restart.

    Insert triggers stand in for server-side triggers: after a row lands in
    ``table``, each trigger may return ``(other_table, row)`` to insert too.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, List[Dict[str, Any]]] = {}
        self._triggers: Dict[str, List[Callable[[Dict[str, Any]], Optional[tuple]]]] = {}
        self._seq = 0

    def add_trigger(self, table: str, fn: Callable[[Dict[str, Any]], Optional[tuple]]) -> None:
        self._triggers.setdefault(table, []).append(fn)

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        record = copy.deepcopy(dict(row))
        record.setdefault("id", str(uuid.uuid4()))
        record.setdefault("created_at", _now_iso())
        self._seq += 1
        record["_seq"] = self._seq
        self._tables.setdefault(table, []).append(record)
        print(f"[STORE LOG] ➕ insert {table} id={record['id']}")

        for trigger in self._triggers.get(table, []):
            derived = trigger(self._public(record))
            if derived:
                other_table, other_row = derived
                self.insert(other_table, other_row)
        return self._public(record)

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        rows = [r for r in self._tables.get(table, []) if self._matches(r, filters)]
        if order_by:
            rows = sorted(rows, key=lambda r: (r.get(order_by) is None, r.get(order_by), r["_seq"]), reverse=descending)
        cols = _parse_columns(columns)
        out = []
        for r in rows:
            public = self._public(r)
            if cols is not None:
                public = {c: public.get(c) for c in cols}
            out.append(public)
        return out

    def update(self, table: str, patch: Dict[str, Any], filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        if not filters:
            raise StoreError("update requires at least one filter")
        changed = []
        for r in self._tables.get(table, []):
            if self._matches(r, filters):
                r.update(copy.deepcopy(patch))
                changed.append(self._public(r))
        print(f"[STORE LOG] ✏️ update {table} filters={filters} -> {len(changed)} row(s)")
        return changed

    def with_token(self, access_token: Optional[str]) -> "MemoryRecordStore":
        # No row-level security in memory; every visitor shares the tables.
        return self

    def count(self, table: str) -> int:
        return len(self._tables.get(table, []))

    @staticmethod
    def _matches(row: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        return all(row.get(k) == v for k, v in (filters or {}).items())

    @staticmethod
    def _public(row: Dict[str, Any]) -> Dict[str, Any]:
        return {k: copy.deepcopy(v) for k, v in row.items() if k != "_seq"}


class SupabaseRecordStore:
    """
    PostgREST client for a Supabase project.

    ``access_token`` is the signed-in visitor's token, so row-level security
    sees the right user; the anon key is used otherwise. ``with_token`` gives a
    per-visitor copy sharing the same HTTP client.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        access_token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout_s: float = 15.0,
    ) -> None:
        if not url or not anon_key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required for the supabase backend")
        self._url = url
        self._base = f"{url.rstrip('/')}/rest/v1"
        self._anon_key = anon_key
        self._access_token = access_token
        self._client = client or httpx.Client(timeout=timeout_s)

    def with_token(self, access_token: Optional[str]) -> "SupabaseRecordStore":
        return SupabaseRecordStore(self._url, self._anon_key, access_token=access_token, client=self._client)

    def close(self) -> None:
        self._client.close()

    def _headers(self, *, returning: bool = False) -> Dict[str, str]:
        token = self._access_token or self._anon_key
        headers = {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        if returning:
            headers["Prefer"] = "return=representation"
        return headers

    @staticmethod
    def _filter_params(filters: Optional[Dict[str, Any]]) -> Dict[str, str]:
        params = {}
        for key, value in (filters or {}).items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            params[key] = f"eq.{value}"
        return params

    def _request(self, method: str, table: str, **kwargs) -> List[Dict[str, Any]]:
        try:
            resp = self._client.request(method, f"{self._base}/{table}", **kwargs)
        except httpx.HTTPError as e:
            print(f"[STORE LOG] ❌ {method} {table} transport error: {e!r}")
            raise StoreError(f"Could not reach storage: {e}") from e
        if not (200 <= resp.status_code < 300):
            print(f"[STORE LOG] ❌ {method} {table} -> HTTP {resp.status_code}")
            raise StoreError(f"Storage request failed: HTTP {resp.status_code} {resp.text[:300]}")
        if not resp.content:
            return []
        try:
            data = resp.json()
        except ValueError as e:
            raise StoreError(f"Storage response was not JSON: {resp.text[:300]}") from e
        return data if isinstance(data, list) else [data]

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        rows = self._request("POST", table, headers=self._headers(returning=True), json=row)
        print(f"[STORE LOG] ➕ insert {table} -> {len(rows)} row(s)")
        return rows[0] if rows else dict(row)

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        params = {"select": ",".join(_parse_columns(columns) or ["*"])}
        params.update(self._filter_params(filters))
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        return self._request("GET", table, headers=self._headers(), params=params)

    def update(self, table: str, patch: Dict[str, Any], filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        if not filters:
            raise StoreError("update requires at least one filter")
        return self._request(
            "PATCH", table,
            headers=self._headers(returning=True),
            params=self._filter_params(filters),
            json=patch,
        )


def seed_packages(store, packages: List[Dict[str, Any]]) -> None:
    for pkg in packages:
        store.insert("packages", pkg)
