import logging
from contextlib import contextmanager

import httpx
from supabase import PostgrestAPIError

from app.core.exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(action: str):
    """Turn PostgREST and transport failures into ``StoreError``."""
    try:
        yield
    except (PostgrestAPIError, httpx.HTTPError) as e:
        logger.error(f"store_error action={action!r} error={e}")
        raise StoreError(f"Database error while {action}.") from e
