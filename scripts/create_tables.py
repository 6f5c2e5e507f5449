"""Print the SQL that creates the tables, for the Supabase SQL editor."""

from app.secret.models import profiles_sql, secrets_sql
from app.friendship.models import friend_request_status_sql, friend_requests_sql

# profiles first: the other tables reference it
SCHEMA = [profiles_sql, secrets_sql, friend_request_status_sql, friend_requests_sql]


def schema_sql() -> str:
    return "\n".join(statement.strip() + "\n" for statement in SCHEMA)


if __name__ == "__main__":
    print(schema_sql())
