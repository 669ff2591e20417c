import os
from dotenv import load_dotenv
load_dotenv()


def _env_flag(name, default="0"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///ats.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    # comma separated; these principals act as platform super admins
    SUPER_ADMIN_EMAILS = os.getenv("SUPER_ADMIN_EMAILS", "")
    TENANT_STRICT_RESOLUTION = _env_flag("TENANT_STRICT_RESOLUTION")
    SCORING_ENGINE = os.getenv("SCORING_ENGINE", "heuristic-v1")
    SCORING_ENGINE_VERSION = os.getenv("SCORING_ENGINE_VERSION", "v1")
    SCORING_ASYNC = _env_flag("SCORING_ASYNC")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    REDIS_URL = None
    SUPER_ADMIN_EMAILS = "root@platform.test"
    TENANT_STRICT_RESOLUTION = False
    SCORING_ASYNC = False
