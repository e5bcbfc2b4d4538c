from typing import Optional
from pydantic import BaseModel


class ApiKeyUpdate(BaseModel):
    serpapi: Optional[str] = None
    pexels: Optional[str] = None
    github: Optional[str] = None


class ApiKeyStatus(BaseModel):
    configured: bool
    masked_key: str


class SettingsResponse(BaseModel):
    serpapi: ApiKeyStatus
    pexels: ApiKeyStatus
    github: ApiKeyStatus
