# app/local_backend.py
"""
Local backend: executes backend_client.Query objects against the SQLAlchemy database.

Lets the admin run fully offline (BACKEND_MODE=local) and gives the test suite a real
table store. Rows go in and come out as plain dicts with ISO-string dates, exactly
like the hosted REST API, so services never know which backend they talk to.
"""

import operator
import secrets
from datetime import date, datetime
from typing import Optional, Any

from passlib.context import CryptContext
from sqlalchemy import Date, DateTime, text
from sqlalchemy.exc import SQLAlchemyError

from app.backend_client import Query
from app.database import SessionLocal
from app.errors import BackendError, AuthenticationError
from app.models import TABLES, User
from app.utils.logger import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_OPERATORS = {
    "eq": operator.eq,
    "neq": operator.ne,
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _coerce(column, value: Any) -> Any:
    """Convert ISO strings to date/datetime for date columns; everything else passes through."""
    if not isinstance(value, str):
        return value
    try:
        if isinstance(column.type, DateTime):
            return datetime.fromisoformat(value)
        if isinstance(column.type, Date):
            return date.fromisoformat(value[:10])
    except ValueError:
        raise BackendError(f'invalid input syntax for type date: "{value}"', status_code=400)
    return value


class LocalBackend:
    mode = "local"

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or SessionLocal

    def table(self, name: str) -> Query:
        return Query(self, name)

    # ── Table access ──────────────────────────────────────────────────────
    def execute(self, query: Query) -> list:
        model = self._model(query.table)
        db = self._session_factory()
        try:
            if query.action == "select":
                return self._select(db, model, query)
            if query.action == "insert":
                return self._insert(db, model, query.payload)
            if query.action == "update":
                return self._update(db, model, query)
            if query.action == "delete":
                return self._delete(db, model, query)
            raise BackendError(f"Unsupported action: {query.action}", status_code=400)
        except SQLAlchemyError as e:
            db.rollback()
            message = str(getattr(e, "orig", None) or e)
            logger.error(f"{query!r} failed: {message}")
            raise BackendError(message, status_code=409 if "UNIQUE" in message.upper() else 400) from e
        finally:
            db.close()

    def _model(self, table: str):
        model = TABLES.get(table)
        if model is None:
            raise BackendError(f'relation "public.{table}" does not exist', status_code=404)
        return model

    def _column(self, model, name: str):
        column = model.__table__.columns.get(name)
        if column is None:
            raise BackendError(f"column {model.__tablename__}.{name} does not exist", status_code=400)
        return column

    def _columns(self, model, selection: str) -> list:
        if selection.strip() == "*":
            return [c.name for c in model.__table__.columns]
        names = [c.strip() for c in selection.split(",") if c.strip()]
        for name in names:
            self._column(model, name)
        return names

    def _filtered(self, db, model, query: Query):
        q = db.query(model)
        for name, op, value in query.filters:
            column = self._column(model, name)
            q = q.filter(_OPERATORS[op](column, _coerce(column, value)))
        return q

    def _row(self, obj, columns: list) -> dict:
        return {name: _jsonable(getattr(obj, name)) for name in columns}

    def _select(self, db, model, query: Query) -> list:
        columns = self._columns(model, query.columns)
        q = self._filtered(db, model, query)
        for name, ascending in query.ordering:
            column = self._column(model, name)
            q = q.order_by(column.asc() if ascending else column.desc())
        if query.row_limit is not None:
            q = q.limit(query.row_limit)
        return [self._row(obj, columns) for obj in q.all()]

    def _values(self, model, values: dict) -> dict:
        return {name: _coerce(self._column(model, name), value) for name, value in values.items()}

    def _insert(self, db, model, rows: list) -> list:
        objs = [model(**self._values(model, row)) for row in rows]
        db.add_all(objs)
        db.commit()
        columns = self._columns(model, "*")
        result = []
        for obj in objs:
            db.refresh(obj)
            result.append(self._row(obj, columns))
        return result

    def _update(self, db, model, query: Query) -> list:
        values = self._values(model, query.payload or {})
        objs = self._filtered(db, model, query).all()
        for obj in objs:
            for name, value in values.items():
                setattr(obj, name, value)
        db.commit()
        columns = self._columns(model, "*")
        return [self._row(obj, columns) for obj in objs]

    def _delete(self, db, model, query: Query) -> list:
        objs = self._filtered(db, model, query).all()
        columns = self._columns(model, "*")
        deleted = [self._row(obj, columns) for obj in objs]
        for obj in objs:
            db.delete(obj)
        db.commit()
        return deleted

    # ── Auth ──────────────────────────────────────────────────────────────
    def _find_user(self, email: str) -> Optional[User]:
        db = self._session_factory()
        try:
            return db.query(User).filter(User.email == email).first()
        finally:
            db.close()

    def sign_in_with_password(self, email: str, password: str) -> dict:
        user = self._find_user(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid login credentials", status_code=400)
        if not user.is_confirmed:
            raise AuthenticationError("Email not confirmed", status_code=400)
        return {
            "access_token": secrets.token_urlsafe(32),
            "token_type": "bearer",
            "user": {"id": user.id, "email": user.email, "full_name": user.full_name},
        }

    def rpc(self, name: str, params: Optional[dict] = None) -> Any:
        params = params or {}
        if name == "verify_user_password":
            user = self._find_user(params.get("in_email", ""))
            valid = bool(user) and verify_password(params.get("in_password", ""), user.password_hash)
            return [{"valid": valid}]
        raise BackendError(f"Could not find the function public.{name}", status_code=404)

    def ping(self) -> bool:
        db = self._session_factory()
        try:
            db.execute(text("SELECT 1"))
            return True
        finally:
            db.close()

    def close(self):
        pass
