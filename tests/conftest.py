"""
Pytest fixtures: an in-memory stand-in for the Supabase client
"""

import itertools
import uuid
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

_clock = itertools.count(1)


def _timestamp() -> str:
    # Strictly increasing so "newest first" ordering is deterministic
    n = next(_clock)
    return f"2025-01-01T{n // 3600:02d}:{(n // 60) % 60:02d}:{n % 60:02d}+00:00"


class FakeAPIError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeDatabase", table: str):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.columns = "*"
        self.payload: Optional[Dict[str, Any]] = None
        self.filters: List[tuple] = []
        self.or_filters: List[str] = []
        self.order_by: Optional[tuple] = None
        self.limit_count: Optional[int] = None

    def select(self, columns: str = "*"):
        self.action = "select"
        self.columns = columns
        return self

    def insert(self, row: Dict[str, Any]):
        self.action = "insert"
        self.payload = row
        return self

    def update(self, values: Dict[str, Any]):
        self.action = "update"
        self.payload = values
        return self

    def eq(self, column: str, value: Any):
        self.filters.append((column, value))
        return self

    def or_(self, expression: str):
        self.or_filters.append(expression)
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, count: int):
        self.limit_count = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        if any(row.get(column) != value for column, value in self.filters):
            return False
        for expression in self.or_filters:
            hits = []
            for clause in expression.split(","):
                column, op, pattern = clause.split(".", 2)
                assert op == "ilike"
                needle = pattern.strip("%").lower()
                hits.append(needle in str(row.get(column) or "").lower())
            if not any(hits):
                return False
        return True

    def _join(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if "profiles(" in self.columns.replace(" ", ""):
            creator = next(
                (p for p in self.db.tables["profiles"] if p["id"] == row.get("creator_id")),
                None,
            )
            row["profiles"] = (
                {"full_name": creator["full_name"], "avatar_url": creator.get("avatar_url")}
                if creator else None
            )
        return row

    def execute(self) -> FakeResult:
        self.db.queries.append(self)
        if self.table_name in self.db.failing_tables:
            raise FakeAPIError(f"relation {self.table_name} unavailable")
        rows = self.db.tables.setdefault(self.table_name, [])

        if self.action == "insert":
            missing = [c for c in self.db.not_null.get(self.table_name, ()) if self.payload.get(c) is None]
            if missing:
                raise FakeAPIError(f'null value in column "{missing[0]}" violates not-null constraint')
            row = {"id": str(uuid.uuid4()), "created_at": _timestamp(), **self.payload}
            rows.append(row)
            return FakeResult([dict(row)])

        matched = [r for r in rows if self._matches(r)]
        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResult([dict(r) for r in matched])

        result = [self._join(dict(r)) for r in matched]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda r: r.get(column) or "", reverse=desc)
        if self.limit_count is not None:
            result = result[:self.limit_count]
        return FakeResult(result)


class FakeDatabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {"profiles": [], "services": []}
        self.not_null = {"services": ("title", "description", "category", "price", "delivery_time", "creator_id")}
        self.failing_tables: set = set()
        self.queries: List[FakeQuery] = []


class FakeSubscription:
    def __init__(self, auth: "FakeAuth", callback):
        self.id = str(uuid.uuid4())
        self.auth = auth
        self.callback = callback

    def unsubscribe(self):
        self.auth.callbacks.pop(self.id, None)


class FakeAuth:
    def __init__(self, db: FakeDatabase):
        self.db = db
        self.users: Dict[str, Dict[str, Any]] = {}
        self.tokens: Dict[str, Any] = {}
        self.current = None
        self.callbacks: Dict[str, Any] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[str, str] = {}
        self.emit_initial_session = False

    def _maybe_fail(self, method: str):
        if method in self.failures:
            raise FakeAPIError(self.failures[method])

    def emit(self, event: str, session):
        for callback in list(self.callbacks.values()):
            callback(event, session)

    def on_auth_state_change(self, callback):
        subscription = FakeSubscription(self, callback)
        self.callbacks[subscription.id] = callback
        if self.emit_initial_session:
            callback("INITIAL_SESSION", self.current)
        return subscription

    def get_session(self):
        self.calls.append(("get_session", None))
        self._maybe_fail("get_session")
        return self.current

    def issue_session(self, user):
        token = f"token-{uuid.uuid4()}"
        self.tokens[token] = user
        return SimpleNamespace(access_token=token, refresh_token="refresh", expires_at=1900000000, user=user)

    def sign_up(self, credentials: Dict[str, Any]):
        self.calls.append(("sign_up", credentials))
        self._maybe_fail("sign_up")
        email = credentials["email"]
        if email in self.users:
            raise FakeAPIError("User already registered")
        metadata = dict(credentials.get("options", {}).get("data", {}))
        user = SimpleNamespace(id=str(uuid.uuid4()), email=email, user_metadata=metadata)
        self.users[email] = {"password": credentials["password"], "user": user}
        # on-signup trigger
        self.db.tables["profiles"].append({
            "id": user.id,
            "full_name": metadata.get("full_name"),
            "user_type": metadata.get("user_type", "client"),
            "email": metadata.get("original_email", email),
            "created_at": _timestamp(),
        })
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials: Dict[str, Any]):
        self.calls.append(("sign_in_with_password", credentials))
        self._maybe_fail("sign_in_with_password")
        record = self.users.get(credentials["email"])
        if not record or record["password"] != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        session = self.issue_session(record["user"])
        self.current = session
        self.emit("SIGNED_IN", session)
        return SimpleNamespace(user=record["user"], session=session)

    def sign_out(self):
        self.calls.append(("sign_out", None))
        self._maybe_fail("sign_out")
        if self.current is not None:
            self.current = None
            self.emit("SIGNED_OUT", None)

    def get_user(self, jwt: Optional[str] = None):
        user = self.tokens.get(jwt)
        if user is None:
            raise FakeAPIError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)


class FakeSupabase:
    def __init__(self):
        self.db = FakeDatabase()
        self.auth = FakeAuth(self.db)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.db, name)

    def register(self, email: str, password: str = "secret1", full_name: str = "Test User",
                 user_type: str = "client", original_email: Optional[str] = None) -> str:
        """Create a user with profile and return a bearer token for it"""
        self.auth.sign_up({
            "email": email,
            "password": password,
            "options": {"data": {
                "full_name": full_name,
                "user_type": user_type,
                "original_email": original_email or email,
            }},
        })
        return self.auth.issue_session(self.auth.users[email]["user"]).access_token

    def add_service(self, creator_id: str, **fields) -> Dict[str, Any]:
        row = {
            "id": str(uuid.uuid4()),
            "creator_id": creator_id,
            "title": "Landing page",
            "description": "A modern landing page",
            "category": "web_development",
            "price": 50.0,
            "delivery_time": 7,
            "image_url": None,
            "tags": None,
            "is_active": True,
            "created_at": _timestamp(),
        }
        row.update(fields)
        self.db.tables["services"].append(row)
        return row

    def user_id(self, email: str) -> str:
        return self.auth.users[email]["user"].id


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def synchronizer(supabase):
    from app.modules.auth.session_sync import SessionSynchronizer
    sync = SessionSynchronizer(supabase)
    yield sync
    sync.close()


@pytest.fixture
def client(supabase, synchronizer):
    """Test client wired to the fake Supabase client"""
    from app.main import app
    from app.core.dependencies import get_session_synchronizer
    from app.database.supabase_client import get_supabase

    synchronizer.start()
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_session_synchronizer] = lambda: synchronizer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def bearer():
    """Authorization header builder"""
    def build(token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
    return build
