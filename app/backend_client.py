# app/backend_client.py
"""
Client for the hosted backend-as-a-service data API.

Every page of the admin talks to its tables through a Query built here:

    backend.table("vehicles").select("plate,status").eq("status", "available").execute()

Three backends execute those queries:
  - RemoteBackend        → PostgREST-style REST API (GET/POST/PATCH/DELETE /rest/v1/{table})
  - LocalBackend         → SQLAlchemy database, for offline use (app.local_backend)
  - UninitializedBackend → URL/key missing; every call raises BackendNotInitializedError

No timeout or retry policy beyond the httpx defaults.
"""

from datetime import date, datetime
from typing import Optional, Any

import httpx

from app.config import settings, Settings
from app.errors import BackendError, BackendNotInitializedError, AuthenticationError
from app.utils.logger import get_logger

logger = get_logger(__name__)

FILTER_OPS = ("eq", "neq", "gt", "gte", "lt", "lte")

_HTTP_METHODS = {
    "select": "GET",
    "insert": "POST",
    "update": "PATCH",
    "delete": "DELETE",
}


def encode_value(value: Any) -> str:
    """Render a filter value the way the REST API expects it in the query string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def to_jsonable(row: dict) -> dict:
    return {k: v.isoformat() if isinstance(v, (date, datetime)) else v for k, v in row.items()}


class Query:
    """Table-scoped request builder. Nothing is sent until execute()."""

    def __init__(self, backend, table: str):
        self.backend = backend
        self.table = table
        self.action = "select"
        self.columns = "*"
        self.payload = None
        self.filters: list[tuple[str, str, Any]] = []
        self.ordering: list[tuple[str, bool]] = []
        self.row_limit: Optional[int] = None

    def select(self, columns: str = "*") -> "Query":
        self.action = "select"
        self.columns = columns
        return self

    def insert(self, rows) -> "Query":
        self.action = "insert"
        self.payload = [to_jsonable(r) for r in (rows if isinstance(rows, list) else [rows])]
        return self

    def update(self, values: dict) -> "Query":
        self.action = "update"
        self.payload = to_jsonable(values)
        return self

    def delete(self) -> "Query":
        self.action = "delete"
        return self

    def filter(self, column: str, op: str, value: Any) -> "Query":
        if op not in FILTER_OPS:
            raise ValueError(f"Unsupported filter operator: {op}")
        self.filters.append((column, op, value))
        return self

    def eq(self, column: str, value: Any) -> "Query":
        return self.filter(column, "eq", value)

    def neq(self, column: str, value: Any) -> "Query":
        return self.filter(column, "neq", value)

    def gt(self, column: str, value: Any) -> "Query":
        return self.filter(column, "gt", value)

    def gte(self, column: str, value: Any) -> "Query":
        return self.filter(column, "gte", value)

    def lt(self, column: str, value: Any) -> "Query":
        return self.filter(column, "lt", value)

    def lte(self, column: str, value: Any) -> "Query":
        return self.filter(column, "lte", value)

    def order(self, column: str, ascending: bool = True) -> "Query":
        self.ordering.append((column, ascending))
        return self

    def limit(self, n: int) -> "Query":
        self.row_limit = n
        return self

    def execute(self) -> list:
        return self.backend.execute(self)

    def __repr__(self):
        return f"<Query {self.action} {self.table} filters={self.filters}>"


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        for key in ("message", "error_description", "msg", "error"):
            if data.get(key):
                return str(data[key])
    return response.text or f"HTTP {response.status_code}"


class RemoteBackend:
    """Hosted data API over HTTP (PostgREST tables + password auth endpoint)."""

    mode = "remote"

    def __init__(self, url: str, key: str, transport: Optional[httpx.BaseTransport] = None):
        self.url = url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.url,
            headers={"apikey": key, "Authorization": f"Bearer {key}"},
            transport=transport,
        )

    def table(self, name: str) -> Query:
        return Query(self, name)

    def execute(self, query: Query) -> list:
        params: list[tuple[str, str]] = []
        if query.action == "select":
            params.append(("select", query.columns))
        for column, op, value in query.filters:
            params.append((column, f"{op}.{encode_value(value)}"))
        if query.ordering:
            params.append(("order", ",".join(
                f"{col}.{'asc' if asc else 'desc'}" for col, asc in query.ordering
            )))
        if query.row_limit is not None:
            params.append(("limit", str(query.row_limit)))

        headers = {}
        if query.action != "select":
            headers["Prefer"] = "return=representation"

        response = self._request(
            _HTTP_METHODS[query.action],
            f"/rest/v1/{query.table}",
            params=params,
            json=query.payload,
            headers=headers,
        )
        if not response.content:
            return []
        return response.json()

    def sign_in_with_password(self, email: str, password: str) -> dict:
        try:
            response = self._request(
                "POST",
                "/auth/v1/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
            )
        except BackendError as e:
            if e.backend_status in (400, 401, 403):
                raise AuthenticationError(e.message, e.backend_status) from e
            raise
        return response.json()

    def rpc(self, name: str, params: Optional[dict] = None) -> Any:
        response = self._request("POST", f"/rest/v1/rpc/{name}", json=params or {})
        if not response.content:
            return None
        return response.json()

    def close(self):
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise BackendError(f"Network error: {e}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(f"{method} {path} → {response.status_code}: {message}")
            raise BackendError(message, status_code=response.status_code)
        return response


class UninitializedBackend:
    """
    Stand-in used when BACKEND_URL / BACKEND_KEY are not set.
    Loading the app still works; every data call raises instead.
    """

    mode = "uninitialized"

    def __init__(self):
        logger.warning("BACKEND_URL or BACKEND_KEY is not set. Backend client will be a stub.")

    def table(self, name: str) -> Query:
        raise BackendNotInitializedError()

    def execute(self, query: Query) -> list:
        raise BackendNotInitializedError()

    def sign_in_with_password(self, email: str, password: str) -> dict:
        raise BackendNotInitializedError()

    def rpc(self, name: str, params: Optional[dict] = None) -> Any:
        raise BackendNotInitializedError()

    def close(self):
        pass


def create_backend(cfg: Settings = settings):
    mode = cfg.BACKEND_MODE.lower()
    if mode == "local":
        from app.local_backend import LocalBackend
        logger.info(f"Using local backend at {cfg.DATABASE_URL}")
        return LocalBackend()
    if mode != "remote":
        logger.warning(f"Unknown BACKEND_MODE '{cfg.BACKEND_MODE}', falling back to remote")
    if not cfg.backend_configured:
        return UninitializedBackend()
    logger.info(f"Using hosted backend at {cfg.BACKEND_URL}")
    return RemoteBackend(cfg.BACKEND_URL, cfg.BACKEND_KEY)


_backend = None


def get_backend():
    """FastAPI dependency — the process-wide backend client, built on first use."""
    global _backend
    if _backend is None:
        _backend = create_backend(settings)
    return _backend


def reset_backend():
    global _backend
    if _backend is not None:
        _backend.close()
    _backend = None
