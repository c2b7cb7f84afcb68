from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import jwt

from legalhub.core.config import settings


def create_access_token(
    user_id: UUID,
    role: str,
    *,
    company_id: UUID | None = None,
    company_slug: str | None = None,
    email: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.jwt_access_token_expire_minutes
    )
    payload = {
        "sub": str(user_id),
        "role": role,
        "company_id": str(company_id) if company_id else None,
        "company_slug": company_slug,
        "email": email,
        "exp": expire,
        "type": "access",
        "jti": str(uuid4()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
