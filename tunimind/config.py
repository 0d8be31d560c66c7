import os
from dotenv import load_dotenv

load_dotenv()

# --- Chat completion (Groq, OpenAI-compatible) ---
API_KEY = os.getenv("API_KEY") or os.getenv("GROQ_API_KEY", "")
GROQ_ENDPOINT = os.getenv("GROQ_ENDPOINT", "https://api.groq.com/openai/v1/chat/completions")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama3-8b-8192")
CHAT_MAX_TOKENS = int(os.getenv("CHAT_MAX_TOKENS", 1000))
CHAT_MAX_MESSAGE_CHARS = int(os.getenv("CHAT_MAX_MESSAGE_CHARS", 1000))
CHAT_TIMEOUT_SECONDS = float(os.getenv("CHAT_TIMEOUT_SECONDS", 60))

# --- Storage ---
# "sql" keeps the key/value namespaces in DATABASE_URL, "supabase" goes through PostgREST
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/tunimind.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

DEFAULT_CLIENT_ID = os.getenv("DEFAULT_CLIENT_ID", "default")

# --- Supabase Configuration ---
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_STORAGE_TABLE = os.getenv("SUPABASE_STORAGE_TABLE", "storage_items")

# --- Demo account with sample-data overlay ---
SPECIAL_USER_ID = "special_user_123"
SPECIAL_USER_EMAIL = os.getenv("SPECIAL_USER_EMAIL", "demo@tunimind.app")
SPECIAL_USER_PASSWORD = os.getenv("SPECIAL_USER_PASSWORD", "123456")
SPECIAL_USER_NAME = os.getenv("SPECIAL_USER_NAME", "TuniMind Demo")
SPECIAL_USER_BIO = "Mental health enthusiast and app tester"
SPECIAL_USER_IMAGE = os.getenv("SPECIAL_USER_IMAGE", "/images/demo-profile.jpg")

# --- Assistant ---
ASSISTANT_NAME = os.getenv("ASSISTANT_NAME", "TuniMind")
