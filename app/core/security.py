"""Bearer-token identity for API requests.

Sign-in happens at the external identity provider. This module only
verifies the JWT it issues and makes sure a matching local ``User`` row
exists so collections and search sessions can reference it.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and validate an identity-provider access token."""
    options = {"verify_aud": bool(settings.AUTH_JWT_AUDIENCE)}
    try:
        payload = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE or None,
            options=options,
        )
    except JWTError as exc:
        raise ValueError("Invalid or expired access token.") from exc

    subject = str(payload.get("sub", "")).strip()
    if not subject:
        raise ValueError("Access token missing subject.")
    return payload


def display_name(payload: Dict[str, Any]) -> Optional[str]:
    """Pick the display name out of the token claims, if the provider sent one."""
    metadata = payload.get("user_metadata") or {}
    if not isinstance(metadata, dict):
        metadata = {}
    for value in (payload.get("name"), metadata.get("full_name"), metadata.get("name")):
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def ensure_user_exists(
    db: Session,
    user_id: str,
    email: Optional[str] = None,
    full_name: Optional[str] = None,
) -> User:
    """Return the local user for a token subject, creating it on first sight.

    Profile fields are refreshed whenever the token carries newer values.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user:
        changed = False
        if email and user.email != email:
            user.email = email
            changed = True
        if full_name and user.full_name != full_name:
            user.full_name = full_name
            changed = True
        if changed:
            db.commit()
        return user

    user = User(id=user_id, email=email, full_name=full_name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request registered the same subject first
        db.rollback()
        return db.query(User).filter(User.id == user_id).one()

    db.refresh(user)
    logger.info(f"Registered new user {user_id}")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """FastAPI dependency resolving the authenticated caller."""
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(credentials.credentials)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    email = payload.get("email") or None
    return ensure_user_exists(
        db, str(payload["sub"]).strip(), email, full_name=display_name(payload)
    )
