"""In-memory stand-in for the parts of ``supabase.Client`` the app calls."""

import os
import time
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
from supabase import AuthApiError, PostgrestAPIError


def _split_top_level(text):
    parts, depth, current = [], 0, ""
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            parts.append(current)
            current = ""
        else:
            current += char
    if current:
        parts.append(current)
    return parts


def _parse_condition(text):
    """``col.eq.val`` or ``and(...)`` into a row predicate."""
    if text.startswith("and(") and text.endswith(")"):
        inner = [_parse_condition(p) for p in _split_top_level(text[4:-1])]
        return lambda row: all(cond(row) for cond in inner)
    if text.startswith("or(") and text.endswith(")"):
        inner = [_parse_condition(p) for p in _split_top_level(text[3:-1])]
        return lambda row: any(cond(row) for cond in inner)

    column, op, value = text.split(".", 2)
    assert op == "eq", f"unsupported operator {op}"
    return lambda row: str(row.get(column)) == value


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.order_by = None
        self.limit_count = None

    # actions
    def select(self, *columns, **kwargs):
        self.action = "select"
        return self

    def insert(self, payload, **kwargs):
        self.action, self.payload = "insert", payload
        return self

    def update(self, payload, **kwargs):
        self.action, self.payload = "update", payload
        return self

    def upsert(self, payload, on_conflict="", **kwargs):
        self.action, self.payload, self.on_conflict = "upsert", payload, on_conflict
        return self

    def delete(self, **kwargs):
        self.action = "delete"
        return self

    # filters
    def eq(self, column, value):
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def in_(self, column, values):
        allowed = {str(v) for v in values}
        self.filters.append(lambda row: str(row.get(column)) in allowed)
        return self

    def or_(self, filters, **kwargs):
        self.filters.append(_parse_condition(f"or({filters})"))
        return self

    def order(self, column, desc=False, **kwargs):
        self.order_by = (column, desc)
        return self

    def limit(self, size, **kwargs):
        self.limit_count = size
        return self

    def execute(self):
        self.db.calls.append((self.table_name, self.action))
        if self.table_name in self.db.fail_tables:
            raise PostgrestAPIError(
                {"message": "simulated failure", "code": "XX000", "details": "", "hint": ""}
            )

        rows = self.db.rows(self.table_name)
        if self.action == "insert":
            return self._respond(self._insert(rows, self.payload))
        if self.action == "upsert":
            return self._respond(self._upsert(rows, self.payload))

        matched = [row for row in rows if all(f(row) for f in self.filters)]

        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return self._respond(matched)
        if self.action == "delete":
            self.db.tables[self.table_name] = [r for r in rows if r not in matched]
            return self._respond(matched)

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        if self.limit_count is not None:
            matched = matched[: self.limit_count]
        return self._respond(matched)

    def _insert(self, rows, payload):
        created = []
        for item in payload if isinstance(payload, list) else [payload]:
            now = self.db.now()
            row = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
            row.update(item)
            rows.append(row)
            created.append(row)
        return created

    def _upsert(self, rows, payload):
        existing = [r for r in rows if r.get(self.on_conflict) == payload[self.on_conflict]]
        if existing:
            existing[0].update(payload)
            return existing
        return self._insert(rows, payload)

    @staticmethod
    def _respond(rows):
        return SimpleNamespace(data=[dict(r) for r in rows], count=None)


class FakeAdmin:
    def __init__(self, auth):
        self.auth = auth
        self.fail = False

    def delete_user(self, user_id, should_soft_delete=False):
        if self.fail:
            raise AuthApiError("simulated admin failure", 500, None)
        self.auth.users.pop(user_id, None)
        self.auth.passwords = {
            e: entry for e, entry in self.auth.passwords.items() if entry[1] != user_id
        }
        self.auth.tokens = {t: u for t, u in self.auth.tokens.items() if u != user_id}


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.passwords = {}
        self.tokens = {}
        self.refresh_tokens = {}
        self.admin = FakeAdmin(self)

    def create_user(self, email, password="Passw0rd!"):
        user = SimpleNamespace(id=str(uuid.uuid4()), email=email)
        self.users[user.id] = user
        self.passwords[email] = (password, user.id)
        return user

    def issue_token(self, user_id):
        token = f"opaque-{uuid.uuid4()}"
        self.tokens[token] = user_id
        return token

    def get_user(self, jwt=None):
        user_id = self.tokens.get(jwt)
        if user_id is None or user_id not in self.users:
            raise AuthApiError("invalid JWT", 401, "bad_jwt")
        return SimpleNamespace(user=self.users[user_id])

    def sign_up(self, credentials):
        if credentials["email"] in self.passwords:
            raise AuthApiError("User already registered", 422, "user_already_exists")
        user = self.create_user(credentials["email"], credentials["password"])
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        password, user_id = self.passwords.get(credentials["email"], (None, None))
        if password is None or password != credentials["password"]:
            raise AuthApiError("Invalid login credentials", 400, "invalid_credentials")
        return SimpleNamespace(user=self.users[user_id], session=self._session(user_id))

    def refresh_session(self, refresh_token=None):
        user_id = self.refresh_tokens.pop(refresh_token, None)
        if user_id is None:
            raise AuthApiError("Invalid Refresh Token", 400, "refresh_token_not_found")
        return SimpleNamespace(user=self.users[user_id], session=self._session(user_id))

    def _session(self, user_id):
        refresh = f"refresh-{uuid.uuid4()}"
        self.refresh_tokens[refresh] = user_id
        return SimpleNamespace(
            access_token=self.issue_token(user_id),
            refresh_token=refresh,
            expires_in=3600,
        )


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.fail_tables = set()
        self.calls = []
        self.auth = FakeAuth()
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def now(self):
        # strictly increasing so created_at ordering is deterministic
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def table(self, name):
        return FakeQuery(self, name)

    def add_user(self, email):
        """Auth user plus profile row, the state sign-up leaves behind."""
        user = self.auth.create_user(email)
        now = self.now()
        self.rows("profiles").append(
            {"id": user.id, "email": email, "created_at": now, "updated_at": now}
        )
        return user


def make_jwt(user, expires_in=3600, secret=None):
    """An access token shaped like the ones Supabase Auth issues."""
    now = int(time.time())
    claims = {
        "sub": user.id,
        "email": user.email,
        "iss": f"{os.environ['PUBLIC_SUPABASE_URL']}/auth/v1",
        "aud": "authenticated",
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(
        claims, secret or os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256"
    )


def auth_header(user, **kwargs):
    return {"Authorization": f"Bearer {make_jwt(user, **kwargs)}"}
