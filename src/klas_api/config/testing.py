from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

SUPABASE_URL = "http://localhost:54321"
SUPABASE_ANON_KEY = "test-anon-key"
SUPABASE_SERVICE_ROLE_KEY = "test-service-role-key"
QR_SECRET = "test-qr-secret"

SCHOOL_TIMEZONE = "Asia/Jakarta"

DEBUG = False
TESTING = True
