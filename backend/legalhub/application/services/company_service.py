import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from legalhub.application.services.audit_service import log_audit_event
from legalhub.application.services.authorization_service import DENY, can_manage_company, enforce, require_roles
from legalhub.application.services.slug_service import base_scope, save_with_unique_slug, slugify
from legalhub.application.services.translation_merge_service import COMPANY_MERGE_SPEC, merge_fields
from legalhub.application.services.translation_store_service import (
    clean_text,
    find_by_localized_slug,
    find_translation,
    translations_by_owner,
    upsert_translation,
)
from legalhub.core.errors import DomainError, NotFoundError, StoreError, ValidationError
from legalhub.domain.actor import ActorContext
from legalhub.domain.models.company import Company, CompanyTranslation
from legalhub.domain.models.specialist_profile import SpecialistProfile
from legalhub.domain.models.user import UserRole
from legalhub.domain.payloads import CompanyProfilePayload

logger = logging.getLogger(__name__)

_PROFILE_TEXT_FIELDS = (
    "description",
    "short_desc",
    "long_desc",
    "meta_title",
    "meta_description",
    "email",
    "phone",
    "website",
    "address",
    "city",
    "map_link",
    "logo_url",
)
_TRANSLATION_TEXT_FIELDS = ("name", "description", "short_desc", "long_desc", "meta_title", "meta_description")


def localize_company(db: Session, company: Company, locale: str) -> dict:
    translation = find_translation(db, CompanyTranslation, owner_attr="company_id", owner_id=company.id, locale=locale)
    return merge_fields(company, translation, COMPANY_MERGE_SPEC, locale=locale)


def list_companies(db: Session, locale: str) -> list[dict]:
    companies = db.execute(select(Company).order_by(Company.name.asc(), Company.id.asc())).scalars().all()
    translations = translations_by_owner(
        db, CompanyTranslation, owner_attr="company_id", owner_ids=[company.id for company in companies], locale=locale
    )
    return [
        merge_fields(company, translations.get(company.id), COMPANY_MERGE_SPEC, locale=locale) for company in companies
    ]


def get_company(db: Session, slug: str, locale: str) -> dict:
    company = find_by_localized_slug(db, Company, CompanyTranslation, owner_attr="company_id", slug=slug, locale=locale)
    if company is None:
        raise NotFoundError("Company not found")
    payload = localize_company(db, company, locale)
    specialists = db.execute(
        select(SpecialistProfile.slug, SpecialistProfile.name)
        .where(SpecialistProfile.company_id == company.id)
        .order_by(SpecialistProfile.name.asc())
    ).all()
    payload["specialists"] = [{"slug": row.slug, "name": row.name} for row in specialists]
    return payload


def _target_company_id(ctx: ActorContext, payload: CompanyProfilePayload) -> UUID:
    require_roles(ctx, UserRole.COMPANY, UserRole.SUPER_ADMIN, operation="companies.update")
    if ctx.has_role(UserRole.SUPER_ADMIN):
        if payload.company_id is None:
            raise ValidationError("company_id is required", field="company_id")
        return payload.company_id
    if ctx.company_id is None:
        raise NotFoundError("No company is associated with this account")
    return ctx.company_id


def update_company_profile(db: Session, ctx: ActorContext, payload: CompanyProfilePayload) -> dict:
    """Apply base profile fields and translations of one company in a single transaction."""
    company_id = _target_company_id(ctx, payload)
    if not can_manage_company(ctx, company_id):
        enforce(DENY, operation="companies.update", ctx=ctx)
    company = db.get(Company, company_id)
    if company is None:
        raise NotFoundError("Company not found")

    provided = payload.model_fields_set
    name = None
    if "name" in provided:
        name = clean_text(payload.name)
        if name is None:
            raise ValidationError("name is required", field="name")
    slug_candidate = slugify(payload.slug) if payload.slug else None
    seen_locales: set[str] = set()
    for item in payload.translations:
        if item.locale.value in seen_locales:
            raise ValidationError(f"Duplicate translation for locale {item.locale.value}", field="translations")
        seen_locales.add(item.locale.value)

    try:
        if name is not None:
            company.name = name
        for field in _PROFILE_TEXT_FIELDS:
            if field in provided:
                setattr(company, field, clean_text(getattr(payload, field)))
        db.flush()
        if slug_candidate and slug_candidate != company.slug:
            save_with_unique_slug(db, company, slug_candidate, base_scope(Company.slug, exclude_id=company.id))

        for item in payload.translations:
            locale = item.locale.value
            upsert_translation(
                db,
                CompanyTranslation,
                owner_attr="company_id",
                owner_id=company.id,
                locale=locale,
                values={
                    field: clean_text(getattr(item, field))
                    for field in _TRANSLATION_TEXT_FIELDS
                    if field in item.model_fields_set
                },
                slug=slugify(item.slug, locale) or None,
                default_slug=slugify(item.name, locale) or company.slug,
            )

        log_audit_event(
            db,
            action="company.profile_updated",
            company_id=company.id,
            actor_id=ctx.user_id,
            metadata={"fields": sorted(provided - {"company_id", "translations"}), "locales": sorted(seen_locales)},
        )
        db.commit()
    except DomainError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("company_profile_update_failed company_id=%s", company_id)
        raise StoreError("Failed to update company profile") from exc

    db.refresh(company)
    logger.info("company_profile_updated company_id=%s user_id=%s", company.id, ctx.user_id)
    return serialize_company_profile(db, company)


def serialize_company_profile(db: Session, company: Company) -> dict:
    translations = db.execute(
        select(CompanyTranslation)
        .where(CompanyTranslation.company_id == company.id)
        .order_by(CompanyTranslation.locale.asc())
    ).scalars().all()
    payload = {field: getattr(company, field) for field in ("id", "slug", "name", *_PROFILE_TEXT_FIELDS)}
    payload["translations"] = [
        {"locale": row.locale, "slug": row.slug, **{field: getattr(row, field) for field in _TRANSLATION_TEXT_FIELDS}}
        for row in translations
    ]
    return payload
