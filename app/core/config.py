import os
from dotenv import load_dotenv

from app.utils.env_helper import env_int, env_list

load_dotenv()

# Supabase project
SUPABASE_URL = os.getenv("PUBLIC_SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SECRET_API_KEY")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_LEEWAY = env_int("JWT_LEEWAY", 60)

CORS_ORIGINS = env_list(
    "CORS_ORIGINS", ["http://localhost:3000", "http://localhost:5173"]
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
# "default" (human readable) or "json"
LOG_FORMAT = os.getenv("LOG_FORMAT", "default")
