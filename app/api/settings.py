import logging

from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.settings import ApiKeyUpdate, SettingsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _settings_response() -> SettingsResponse:
    masked = settings.get_all_api_keys_masked()
    return SettingsResponse(
        serpapi=masked["serpapi"],
        pexels=masked["pexels"],
        github=masked["github"],
    )


@router.get("", response_model=SettingsResponse)
def get_settings(
    current_user: User = Depends(get_current_user),
):
    """Return which provider API keys are configured with masked values."""
    return _settings_response()


@router.put("/keys", response_model=SettingsResponse)
def update_keys(
    payload: ApiKeyUpdate,
    current_user: User = Depends(get_current_user),
):
    """Save new provider API keys and return updated masked status."""
    for service, value in payload.model_dump(exclude_none=True).items():
        settings.set_api_key(service, value)
        logger.info(f"Updated {service} API key")
    return _settings_response()
