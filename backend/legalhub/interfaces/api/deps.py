from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from legalhub.application.services.affiliation_service import build_actor_context
from legalhub.core.i18n import Locale, normalize_locale
from legalhub.core.security import decode_token
from legalhub.domain.actor import Actor, ActorContext
from legalhub.domain.models.user import UserRole
from legalhub.infrastructure.db.session import get_db

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_actor(token: str | None = Depends(oauth2_scheme)) -> Actor | None:
    if not token:
        return None
    try:
        claims = decode_token(token)
    except jwt.PyJWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    if claims.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")

    try:
        user_id = UUID(claims["sub"])
        role = UserRole(claims["role"])
        company_id = UUID(claims["company_id"]) if claims.get("company_id") else None
    except (KeyError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload") from exc

    return Actor(
        role=role,
        user_id=user_id,
        company_id=company_id,
        company_slug=claims.get("company_slug") or None,
        email=claims.get("email") or None,
    )


def get_actor_context(actor: Actor | None = Depends(get_actor), db: Session = Depends(get_db)) -> ActorContext:
    return build_actor_context(db, actor)


def require_actor(ctx: ActorContext = Depends(get_actor_context)) -> ActorContext:
    if ctx.is_anonymous:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return ctx


def get_locale(locale: str | None = Query(default=None)) -> str:
    return normalize_locale(locale).value


def path_locale(locale: str) -> str:
    try:
        return Locale(locale.strip().lower()).value
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unsupported locale") from exc
