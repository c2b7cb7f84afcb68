import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from legalhub.application.services.audit_service import log_audit_event
from legalhub.application.services.authorization_service import (
    DENY,
    can_manage_category,
    enforce,
    require_roles,
)
from legalhub.application.services.slug_service import base_scope, save_with_unique_slug, slugify
from legalhub.application.services.translation_merge_service import CATEGORY_MERGE_SPEC, merge_fields
from legalhub.core.errors import DomainError, NotFoundError, StoreError, ValidationError
from legalhub.domain.actor import ActorContext
from legalhub.domain.models.category import Category, CategoryTranslation, CategoryType
from legalhub.domain.models.company import Company
from legalhub.domain.models.user import UserRole
from legalhub.domain.payloads import CategoryCreatePayload

logger = logging.getLogger(__name__)


def _localize(db: Session, categories: list[Category], locale: str) -> list[dict]:
    if not categories:
        return []
    rows = db.execute(
        select(CategoryTranslation).where(
            CategoryTranslation.category_id.in_([category.id for category in categories]),
            CategoryTranslation.locale == locale,
        )
    ).scalars().all()
    by_category = {row.category_id: row for row in rows}
    return [merge_fields(category, by_category.get(category.id), CATEGORY_MERGE_SPEC, locale=locale) for category in categories]


def list_categories(db: Session, ctx: ActorContext, locale: str) -> list[dict]:
    """Global public categories, plus every category of the caller's company."""
    visible = Category.type == CategoryType.GLOBAL.value
    if ctx.has_role(UserRole.SUPER_ADMIN):
        query = select(Category)
    else:
        visible = visible & Category.is_public.is_(True)
        if ctx.company_id is not None:
            visible = or_(visible, Category.company_id == ctx.company_id)
        query = select(Category).where(visible)
    rows = db.execute(query.order_by(Category.type.asc(), Category.name.asc())).scalars().all()
    return _localize(db, list(rows), locale)


def create_category(db: Session, ctx: ActorContext, payload: CategoryCreatePayload) -> Category:
    require_roles(ctx, UserRole.COMPANY, UserRole.SUPER_ADMIN, operation="categories.create")
    name = (payload.name or "").strip()
    if not name:
        raise ValidationError("name is required", field="name")
    candidate = slugify(payload.slug) or slugify(name)
    if not candidate:
        raise ValidationError("slug could not be derived from name", field="slug")

    if ctx.has_role(UserRole.SUPER_ADMIN) and payload.global_category:
        category_type, company_id = CategoryType.GLOBAL, None
    else:
        company_id = payload.company_id if ctx.has_role(UserRole.SUPER_ADMIN) else ctx.company_id
        if company_id is None:
            raise ValidationError("No company is associated with this account", field="company_id")
        if db.get(Company, company_id) is None:
            raise ValidationError("Unknown company", field="company_id")
        category_type = CategoryType.COMPANY

    category = Category(
        name=name,
        type=category_type.value,
        company_id=company_id,
        is_public=payload.is_public,
    )
    try:
        save_with_unique_slug(db, category, candidate, base_scope(Category.slug))
        log_audit_event(
            db,
            action="category.created",
            company_id=company_id,
            actor_id=ctx.user_id,
            metadata={"category_id": str(category.id), "slug": category.slug, "type": category.type},
        )
        db.commit()
    except DomainError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("Failed to store category") from exc
    db.refresh(category)
    return category


def delete_category(db: Session, ctx: ActorContext, category_id: UUID) -> None:
    require_roles(ctx, UserRole.COMPANY, UserRole.SUPER_ADMIN, operation="categories.delete")
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    if not can_manage_category(ctx, category):
        enforce(DENY, operation="categories.delete", ctx=ctx)

    log_audit_event(
        db,
        action="category.deleted",
        company_id=category.company_id,
        actor_id=ctx.user_id,
        metadata={"category_id": str(category.id), "slug": category.slug},
    )
    db.delete(category)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("Failed to delete category") from exc
    logger.info("category_deleted category_id=%s user_id=%s", category_id, ctx.user_id)


def serialize_category(category: Category) -> dict:
    return {
        "id": str(category.id),
        "name": category.name,
        "slug": category.slug,
        "type": category.type,
        "company_id": str(category.company_id) if category.company_id else None,
        "is_public": category.is_public,
    }
