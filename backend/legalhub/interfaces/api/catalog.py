from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from legalhub.application.services.catalog_service import (
    get_practice_area,
    get_service,
    list_practice_areas,
    upsert_practice_area_translation,
    upsert_service_translation,
)
from legalhub.domain.actor import ActorContext
from legalhub.domain.payloads import CatalogTranslationPayload
from legalhub.infrastructure.db.session import get_db
from legalhub.interfaces.api.deps import get_locale, path_locale, require_actor

router = APIRouter(tags=["catalog"])


@router.get("/practice-areas", status_code=status.HTTP_200_OK)
def list_practice_areas_endpoint(locale: str = Depends(get_locale), db: Session = Depends(get_db)) -> dict:
    return {"items": list_practice_areas(db, locale)}


@router.get("/practice-areas/{slug}", status_code=status.HTTP_200_OK)
def get_practice_area_endpoint(slug: str, locale: str = Depends(get_locale), db: Session = Depends(get_db)) -> dict:
    return get_practice_area(db, slug, locale)


@router.put("/practice-areas/{practice_area_id}/translations/{locale}", status_code=status.HTTP_200_OK)
def save_practice_area_translation(
    practice_area_id: UUID,
    payload: CatalogTranslationPayload,
    locale: str = Depends(path_locale),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> dict:
    return upsert_practice_area_translation(db, ctx, practice_area_id, locale, payload)


@router.get("/services/{slug}", status_code=status.HTTP_200_OK)
def get_service_endpoint(slug: str, locale: str = Depends(get_locale), db: Session = Depends(get_db)) -> dict:
    return get_service(db, slug, locale)


@router.put("/services/{service_id}/translations/{locale}", status_code=status.HTTP_200_OK)
def save_service_translation(
    service_id: UUID,
    payload: CatalogTranslationPayload,
    locale: str = Depends(path_locale),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> dict:
    return upsert_service_translation(db, ctx, service_id, locale, payload)
