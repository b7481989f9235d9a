import os
from dotenv import load_dotenv

load_dotenv()  # loads .env

BASE_DIR = os.path.dirname(os.path.dirname(__file__))


class Config:
    DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{os.path.join(BASE_DIR, 'db.sqlite')}")
    SQL_ECHO = os.environ.get("SQL_ECHO", "").lower() in ("1", "true", "yes")

    # token signing / credential hashing
    JWT_SECRET = os.environ.get("JWT_SECRET") or os.environ.get("SECRET_KEY", "change-me")
    TOKEN_TTL_SECONDS = int(os.environ.get("TOKEN_TTL_SECONDS", 7 * 24 * 3600))
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 12))

    CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "").split(",") if o.strip()]
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


config = Config()
