import logging
from pydantic_settings import BaseSettings
from typing import Optional

logger = logging.getLogger(__name__)

# service name -> env var; the env var name is also the app_settings key
KEY_MAP = {
    "serpapi": "SERPAPI_API_KEY",
    "pexels": "PEXELS_API_KEY",
    "github": "GITHUB_TOKEN",
}


def _get_db_setting(key: str) -> Optional[str]:
    """Read a runtime key override from the app_settings table."""
    from sqlalchemy.exc import SQLAlchemyError

    from app.core.database import SessionLocal
    from app.models.app_setting import AppSetting

    try:
        with SessionLocal() as db:
            row = db.get(AppSetting, key)
            return row.value if row else None
    except SQLAlchemyError as e:
        # Table does not exist until the first startup has run create_all
        logger.debug(f"Could not read DB setting {key}: {e}")
        return None


def _set_db_setting(key: str, value: str) -> None:
    """Insert or replace a runtime key override."""
    from sqlalchemy.exc import SQLAlchemyError

    from app.core.database import SessionLocal
    from app.models.app_setting import AppSetting

    try:
        with SessionLocal() as db:
            db.merge(AppSetting(key=key, value=value))
            db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Could not save DB setting {key}: {e}")


def mask_key(key: str) -> str:
    if not key:
        return ""
    if len(key) > 6:
        return key[:3] + "..." + key[-3:]
    return "***"


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./bookmarks.db"

    # Tokens are issued by the external identity provider and signed with its JWT secret
    AUTH_JWT_SECRET: str = "change_me_in_production"
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_JWT_AUDIENCE: Optional[str] = "authenticated"

    SERPAPI_API_KEY: str = ""
    PEXELS_API_KEY: str = ""
    GITHUB_TOKEN: str = ""
    CORS_ORIGINS: str = "http://localhost:3000"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_api_key(self, service: str) -> str:
        """Get API key: first check database, then fall back to env/settings."""
        env_attr = KEY_MAP.get(service, "")
        if not env_attr:
            return ""
        db_val = _get_db_setting(env_attr)
        if db_val:
            return db_val
        return getattr(self, env_attr, "")

    def set_api_key(self, service: str, value: str) -> None:
        """Persist an API key to the database."""
        env_attr = KEY_MAP.get(service)
        if env_attr:
            _set_db_setting(env_attr, value.strip())

    def get_all_api_keys_masked(self) -> dict:
        """Return masked versions of all API keys for the settings UI."""
        result = {}
        for service in KEY_MAP:
            key = self.get_api_key(service)
            result[service] = {"configured": bool(key), "masked_key": mask_key(key)}
        return result


settings = Settings()
