from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from legalhub.application.services.specialist_service import (
    get_own_specialist_profile,
    get_specialist,
    list_specialists,
    upsert_specialist_translation,
)
from legalhub.domain.actor import ActorContext
from legalhub.domain.payloads import SpecialistTranslationPayload
from legalhub.infrastructure.db.session import get_db
from legalhub.interfaces.api.deps import get_locale, path_locale, require_actor

router = APIRouter(prefix="/specialists", tags=["specialists"])


@router.get("", status_code=status.HTTP_200_OK)
def list_specialists_endpoint(
    company: str | None = Query(default=None, max_length=255),
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
) -> dict:
    return {"items": list_specialists(db, locale, company_slug=company)}


@router.get("/me", status_code=status.HTTP_200_OK)
def get_my_specialist_profile(
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> dict:
    return get_own_specialist_profile(db, ctx, locale)


@router.get("/{slug}", status_code=status.HTTP_200_OK)
def get_specialist_by_slug(
    slug: str,
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
) -> dict:
    return get_specialist(db, slug, locale)


@router.put("/{profile_id}/translations/{locale}", status_code=status.HTTP_200_OK)
def save_specialist_translation(
    profile_id: UUID,
    payload: SpecialistTranslationPayload,
    locale: str = Depends(path_locale),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> dict:
    return upsert_specialist_translation(db, ctx, profile_id, locale, payload)
