"""Practice areas and the services offered under them, localized per request."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from legalhub.application.services.audit_service import log_audit_event
from legalhub.application.services.authorization_service import require_roles
from legalhub.application.services.slug_service import slugify
from legalhub.application.services.translation_merge_service import (
    PRACTICE_AREA_MERGE_SPEC,
    SERVICE_MERGE_SPEC,
    merge_fields,
)
from legalhub.application.services.translation_store_service import (
    clean_text,
    find_by_localized_slug,
    find_translation,
    upsert_translation,
)
from legalhub.core.errors import DomainError, NotFoundError, StoreError
from legalhub.domain.actor import ActorContext
from legalhub.domain.models.practice_area import PracticeArea, PracticeAreaTranslation, Service, ServiceTranslation
from legalhub.domain.models.user import UserRole
from legalhub.domain.payloads import CatalogTranslationPayload

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("title", "description", "meta_title", "meta_description")


def _localize_many(db: Session, rows: list, translation_model: type, owner_attr: str, spec, locale: str) -> list[dict]:
    if not rows:
        return []
    owner_column = getattr(translation_model, owner_attr)
    translations = db.execute(
        select(translation_model).where(
            owner_column.in_([row.id for row in rows]), translation_model.locale == locale
        )
    ).scalars().all()
    by_owner = {getattr(item, owner_attr): item for item in translations}
    return [merge_fields(row, by_owner.get(row.id), spec, locale=locale) for row in rows]


def list_practice_areas(db: Session, locale: str) -> list[dict]:
    rows = db.execute(select(PracticeArea).order_by(PracticeArea.title.asc())).scalars().all()
    return _localize_many(db, list(rows), PracticeAreaTranslation, "practice_area_id", PRACTICE_AREA_MERGE_SPEC, locale)


def get_practice_area(db: Session, slug: str, locale: str) -> dict:
    area = find_by_localized_slug(
        db, PracticeArea, PracticeAreaTranslation, owner_attr="practice_area_id", slug=slug, locale=locale
    )
    if area is None:
        raise NotFoundError("Practice area not found")
    translation = find_translation(
        db, PracticeAreaTranslation, owner_attr="practice_area_id", owner_id=area.id, locale=locale
    )
    payload = merge_fields(area, translation, PRACTICE_AREA_MERGE_SPEC, locale=locale)
    services = db.execute(
        select(Service).where(Service.practice_area_id == area.id).order_by(Service.title.asc())
    ).scalars().all()
    payload["services"] = _localize_many(db, list(services), ServiceTranslation, "service_id", SERVICE_MERGE_SPEC, locale)
    return payload


def get_service(db: Session, slug: str, locale: str) -> dict:
    service = find_by_localized_slug(db, Service, ServiceTranslation, owner_attr="service_id", slug=slug, locale=locale)
    if service is None:
        raise NotFoundError("Service not found")
    translation = find_translation(db, ServiceTranslation, owner_attr="service_id", owner_id=service.id, locale=locale)
    return merge_fields(service, translation, SERVICE_MERGE_SPEC, locale=locale)


def _save_catalog_translation(
    db: Session,
    ctx: ActorContext,
    *,
    entity,
    translation_model: type,
    owner_attr: str,
    spec,
    locale: str,
    payload: CatalogTranslationPayload,
    action: str,
) -> dict:
    provided = payload.model_fields_set
    try:
        translation = upsert_translation(
            db,
            translation_model,
            owner_attr=owner_attr,
            owner_id=entity.id,
            locale=locale,
            values={field: clean_text(getattr(payload, field)) for field in _TEXT_FIELDS if field in provided},
            slug=slugify(payload.slug, locale) or None,
            default_slug=slugify(payload.title, locale) or entity.slug,
        )
        log_audit_event(
            db,
            action=action,
            actor_id=ctx.user_id,
            metadata={"id": str(entity.id), "locale": locale, "slug": translation.slug},
        )
        db.commit()
    except DomainError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("catalog_translation_failed action=%s id=%s locale=%s", action, entity.id, locale)
        raise StoreError("Failed to save translation") from exc
    return merge_fields(entity, translation, spec, locale=locale)


def upsert_practice_area_translation(
    db: Session, ctx: ActorContext, practice_area_id: UUID, locale: str, payload: CatalogTranslationPayload
) -> dict:
    require_roles(ctx, UserRole.SUPER_ADMIN, operation="practice_areas.translate")
    area = db.get(PracticeArea, practice_area_id)
    if area is None:
        raise NotFoundError("Practice area not found")
    return _save_catalog_translation(
        db,
        ctx,
        entity=area,
        translation_model=PracticeAreaTranslation,
        owner_attr="practice_area_id",
        spec=PRACTICE_AREA_MERGE_SPEC,
        locale=locale,
        payload=payload,
        action="practice_area.translation_saved",
    )


def upsert_service_translation(
    db: Session, ctx: ActorContext, service_id: UUID, locale: str, payload: CatalogTranslationPayload
) -> dict:
    require_roles(ctx, UserRole.SUPER_ADMIN, operation="services.translate")
    service = db.get(Service, service_id)
    if service is None:
        raise NotFoundError("Service not found")
    return _save_catalog_translation(
        db,
        ctx,
        entity=service,
        translation_model=ServiceTranslation,
        owner_attr="service_id",
        spec=SERVICE_MERGE_SPEC,
        locale=locale,
        payload=payload,
        action="service.translation_saved",
    )
