import os

from dotenv import load_dotenv

load_dotenv()


def require_setting(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise RuntimeError(f"{name} must be set in the environment or .env")
    return value


DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./ballotbox.db")

# The single identity allowed to create elections.
ELECTION_AUTHORITY = os.environ.get("ELECTION_AUTHORITY", "authority")

# Tokens signed with this key are trusted as caller identity.
SECRET_KEY = require_setting("SECRET_KEY")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "8000"))
