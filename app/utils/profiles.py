from typing import Dict, Iterable, Optional

from supabase import Client

from app.models.profile import Profile
from app.utils.db import store_errors


def get_profile_by_email(client: Client, email: str) -> Optional[Profile]:
    """Look up a profile by exact email. Returns None when nobody matches."""

    with store_errors("looking up profile"):
        response = (
            client.table("profiles")
            .select("*")
            .eq("email", email)
            .limit(1)
            .execute()
        )

    if not response.data:
        return None
    return Profile(**response.data[0])


def get_emails(client: Client, user_ids: Iterable[str]) -> Dict[str, str]:
    """Map each user id to its email, skipping ids without a profile."""

    ids = sorted({str(user_id) for user_id in user_ids})
    if not ids:
        return {}

    with store_errors("looking up profile emails"):
        response = (
            client.table("profiles").select("id, email").in_("id", ids).execute()
        )

    return {str(row["id"]): row["email"] for row in response.data or []}
