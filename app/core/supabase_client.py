from functools import lru_cache

from supabase import create_client, Client

from app.core import config


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Service-role client shared by every request.

    Built on first use so importing the app does not require credentials.
    Routes receive it through ``Depends(get_supabase)``.
    """
    return create_client(config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY)
