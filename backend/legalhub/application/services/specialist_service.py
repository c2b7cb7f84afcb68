import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from legalhub.application.services.affiliation_service import find_specialist_profile_for_actor
from legalhub.application.services.audit_service import log_audit_event
from legalhub.application.services.authorization_service import (
    DENY,
    can_edit_specialist_profile,
    enforce,
    require_roles,
)
from legalhub.application.services.slug_service import slugify
from legalhub.application.services.translation_merge_service import SPECIALIST_MERGE_SPEC, merge_fields
from legalhub.application.services.translation_store_service import (
    clean_text,
    find_by_localized_slug,
    find_translation,
    translations_by_owner,
    upsert_translation,
)
from legalhub.core.errors import DomainError, NotFoundError, StoreError
from legalhub.domain.actor import ActorContext
from legalhub.domain.composite import parse_composite
from legalhub.domain.models.company import Company
from legalhub.domain.models.specialist_profile import SpecialistProfile, SpecialistProfileTranslation
from legalhub.domain.models.user import UserRole
from legalhub.domain.payloads import SpecialistTranslationPayload

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("name", "role", "bio", "philosophy", "meta_title", "meta_description")


def localize_specialist(db: Session, profile: SpecialistProfile, locale: str) -> dict:
    translation = find_translation(
        db,
        SpecialistProfileTranslation,
        owner_attr="specialist_profile_id",
        owner_id=profile.id,
        locale=locale,
    )
    return merge_fields(profile, translation, SPECIALIST_MERGE_SPEC, locale=locale)


def list_specialists(db: Session, locale: str, company_slug: str | None = None) -> list[dict]:
    """Specialist index in ``locale``, optionally narrowed to one company by its base slug."""
    statement = select(SpecialistProfile).order_by(SpecialistProfile.name.asc(), SpecialistProfile.id.asc())
    if company_slug:
        statement = statement.join(Company, Company.id == SpecialistProfile.company_id).where(
            Company.slug == company_slug
        )
    profiles = db.execute(statement).scalars().all()
    translations = translations_by_owner(
        db,
        SpecialistProfileTranslation,
        owner_attr="specialist_profile_id",
        owner_ids=[profile.id for profile in profiles],
        locale=locale,
    )
    return [
        merge_fields(profile, translations.get(profile.id), SPECIALIST_MERGE_SPEC, locale=locale)
        for profile in profiles
    ]


def get_specialist(db: Session, slug: str, locale: str) -> dict:
    profile = find_by_localized_slug(
        db,
        SpecialistProfile,
        SpecialistProfileTranslation,
        owner_attr="specialist_profile_id",
        slug=slug,
        locale=locale,
    )
    if profile is None:
        raise NotFoundError("Specialist not found")
    payload = localize_specialist(db, profile, locale)
    company = db.get(Company, profile.company_id) if profile.company_id else None
    payload["company"] = {"slug": company.slug, "name": company.name} if company else None
    return payload


def get_own_specialist_profile(db: Session, ctx: ActorContext, locale: str) -> dict:
    require_roles(ctx, UserRole.SPECIALIST, operation="specialists.me")
    profile = find_specialist_profile_for_actor(db, ctx.actor)
    if profile is None:
        raise NotFoundError("No specialist profile is linked to this account")
    return localize_specialist(db, profile, locale)


def upsert_specialist_translation(
    db: Session,
    ctx: ActorContext,
    profile_id: UUID,
    locale: str,
    payload: SpecialistTranslationPayload,
) -> dict:
    profile = db.get(SpecialistProfile, profile_id)
    if profile is None:
        raise NotFoundError("Specialist not found")
    if not can_edit_specialist_profile(ctx, profile):
        enforce(DENY, operation="specialists.translate", ctx=ctx)

    provided = payload.model_fields_set
    values = {field: clean_text(getattr(payload, field)) for field in _TEXT_FIELDS if field in provided}
    for field in SPECIALIST_MERGE_SPEC.composite_fields:
        if field in provided:
            values[field] = parse_composite(getattr(payload, field), field=field)

    try:
        upsert_translation(
            db,
            SpecialistProfileTranslation,
            owner_attr="specialist_profile_id",
            owner_id=profile.id,
            locale=locale,
            values=values,
            slug=slugify(payload.slug, locale) or None,
            default_slug=slugify(payload.name, locale) or profile.slug,
        )
        log_audit_event(
            db,
            action="specialist.translation_saved",
            company_id=profile.company_id,
            actor_id=ctx.user_id,
            metadata={"specialist_profile_id": str(profile.id), "locale": locale},
        )
        db.commit()
    except DomainError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("specialist_translation_failed profile_id=%s locale=%s", profile_id, locale)
        raise StoreError("Failed to save specialist translation") from exc

    logger.info("specialist_translation_saved profile_id=%s locale=%s", profile.id, locale)
    return localize_specialist(db, profile, locale)
