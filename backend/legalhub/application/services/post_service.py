import logging
import re
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from legalhub.application.services.audit_service import log_audit_event
from legalhub.application.services.authorization_service import (
    CONTENT_AUTHOR_ROLES,
    check_category_attachable,
    decide_post_read,
    decide_post_write,
    enforce,
    require_roles,
)
from legalhub.application.services.post_query_service import localize_posts
from legalhub.application.services.slug_service import (
    base_scope,
    save_with_unique_slug,
    slugify,
    translation_scope,
)
from legalhub.application.services.translation_store_service import find_by_localized_slug
from legalhub.core.config import settings
from legalhub.core.errors import DomainError, NotFoundError, StoreError, ValidationError
from legalhub.domain.actor import ActorContext
from legalhub.domain.models.category import Category
from legalhub.domain.models.company import Company
from legalhub.domain.models.post import (
    AuthorType,
    Post,
    PostCategory,
    PostScope,
    PostStatus,
    PostTranslation,
)
from legalhub.domain.models.user import UserRole
from legalhub.domain.payloads import PostCreatePayload, PostTranslationPayload, PostUpdatePayload

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")

_AUTHOR_TYPE_BY_ROLE = {
    UserRole.SUPER_ADMIN: AuthorType.SUPER_ADMIN,
    UserRole.COMPANY: AuthorType.COMPANY,
    UserRole.SPECIALIST: AuthorType.SPECIALIST,
}

_TRANSLATION_TEXT_FIELDS = ("title", "excerpt", "body", "meta_title", "meta_description", "cover_image_alt")


def calculate_reading_time(body: str | None) -> int:
    words = _TAG_RE.sub(" ", body or "").split()
    return max(1, round(len(words) / settings.words_per_minute))


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    return value.strip()


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _validate_translations(translations: list[PostTranslationPayload]) -> list[PostTranslationPayload]:
    seen: set[str] = set()
    for item in translations:
        if item.locale.value in seen:
            raise ValidationError(f"Duplicate translation for locale {item.locale.value}", field="translations")
        seen.add(item.locale.value)
    return translations


def _load_attachable_categories(
    db: Session, category_ids: list[UUID], effective_company_id: UUID | None
) -> list[Category]:
    unique_ids = list(dict.fromkeys(category_ids))
    if not unique_ids:
        return []
    categories = db.execute(select(Category).where(Category.id.in_(unique_ids))).scalars().all()
    if len(categories) != len(unique_ids):
        raise ValidationError("One or more categories are invalid", field="category_ids")
    for category in categories:
        check_category_attachable(category, effective_company_id)
    return list(categories)


def _replace_categories(db: Session, post: Post, categories: list[Category]) -> None:
    db.execute(delete(PostCategory).where(PostCategory.post_id == post.id))
    for category in categories:
        db.add(PostCategory(post_id=post.id, category_id=category.id))


def _translation_slug_candidate(post: Post, item: PostTranslationPayload) -> str:
    locale = item.locale.value
    return slugify(item.slug, locale) or slugify(item.title, locale) or post.slug


def _upsert_translation(db: Session, post: Post, item: PostTranslationPayload) -> PostTranslation:
    locale = item.locale.value
    provided = item.model_fields_set
    translation = db.execute(
        select(PostTranslation).where(PostTranslation.post_id == post.id, PostTranslation.locale == locale)
    ).scalar_one_or_none()
    is_new = translation is None
    if is_new:
        translation = PostTranslation(post_id=post.id, locale=locale)

    for name in _TRANSLATION_TEXT_FIELDS:
        if is_new or name in provided:
            setattr(translation, name, _clean_text(getattr(item, name)))

    scope = translation_scope(
        PostTranslation.slug, locale=locale, owner_column=PostTranslation.post_id, owner_id=post.id
    )
    if is_new or slugify(item.slug, locale):
        if not is_new:
            db.flush()
        save_with_unique_slug(db, translation, _translation_slug_candidate(post, item), scope)
    return translation


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("post_write_failed action=%s", action)
        raise StoreError("Failed to store post") from exc


def _run_write(db: Session, action: str, write) -> None:
    """Run ``write`` and commit once; any failure discards the whole unit of work."""
    try:
        write()
    except DomainError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("post_write_failed action=%s", action)
        raise StoreError("Failed to store post") from exc
    _commit(db, action)


def create_post(db: Session, ctx: ActorContext, payload: PostCreatePayload) -> Post:
    require_roles(ctx, *CONTENT_AUTHOR_ROLES, operation="posts.create")
    if payload.scope == PostScope.SPECIALIST:
        require_roles(ctx, UserRole.SPECIALIST, UserRole.SUPER_ADMIN, operation="posts.create")
    elif payload.scope == PostScope.COMPANY:
        require_roles(ctx, UserRole.COMPANY, UserRole.SUPER_ADMIN, operation="posts.create")
    elif payload.scope == PostScope.ADMIN:
        require_roles(ctx, UserRole.SUPER_ADMIN, operation="posts.create")

    title = _require_text(payload.title, "title")
    body = _require_text(payload.body, "body")
    locale = payload.locale.value
    base_slug = slugify(payload.slug, locale) or slugify(title, locale)
    if not base_slug:
        raise ValidationError("slug could not be derived from title", field="slug")
    translations = _validate_translations(payload.translations)

    is_super_admin = ctx.has_role(UserRole.SUPER_ADMIN)
    company_id = payload.company_id if is_super_admin else ctx.company_id
    if company_id is not None and is_super_admin:
        if db.get(Company, company_id) is None:
            raise ValidationError("Unknown company", field="company_id")
    categories = _load_attachable_categories(db, payload.category_ids, company_id)

    author_type = _AUTHOR_TYPE_BY_ROLE[ctx.role]
    if is_super_admin and payload.author_type is not None:
        author_type = payload.author_type

    published_at = None
    if payload.status == PostStatus.PUBLISHED:
        published_at = payload.published_at or datetime.now(UTC)

    post = Post(
        title=title,
        body=body,
        excerpt=_clean_text(payload.excerpt),
        cover_image=_clean_text(payload.cover_image),
        cover_image_alt=_clean_text(payload.cover_image_alt),
        meta_title=_clean_text(payload.meta_title),
        meta_description=_clean_text(payload.meta_description),
        status=payload.status.value,
        author_type=author_type.value,
        author_id=ctx.user_id,
        company_id=company_id,
        locale=locale,
        published_at=published_at,
        reading_time=calculate_reading_time(body),
    )

    def write() -> None:
        save_with_unique_slug(db, post, base_slug, base_scope(Post.slug))
        for item in translations:
            _upsert_translation(db, post, item)
        _replace_categories(db, post, categories)
        log_audit_event(
            db,
            action="post.created",
            company_id=company_id,
            actor_id=ctx.user_id,
            metadata={"post_id": str(post.id), "slug": post.slug, "locale": locale},
        )

    _run_write(db, "create", write)
    db.refresh(post)
    logger.info("post_created post_id=%s slug=%s company_id=%s", post.id, post.slug, post.company_id)
    return post


def _get_post(db: Session, post_id: UUID) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def update_post(db: Session, ctx: ActorContext, post_id: UUID, payload: PostUpdatePayload) -> Post:
    post = _get_post(db, post_id)
    decision = enforce(
        decide_post_write(ctx, post.ownership, post.company_id), operation="posts.update", ctx=ctx
    )
    provided = payload.model_fields_set

    title = _require_text(payload.title, "title") if "title" in provided else None
    body = _require_text(payload.body, "body") if "body" in provided else None
    translations = _validate_translations(payload.translations or [])
    categories = None
    if payload.category_ids is not None:
        effective_company_id = post.company_id or ctx.company_id
        categories = _load_attachable_categories(db, payload.category_ids, effective_company_id)

    slug_candidate = None
    if payload.slug and slugify(payload.slug, post.locale):
        slug_candidate = slugify(payload.slug, post.locale)
    elif title is not None and title != post.title:
        slug_candidate = slugify(title, post.locale)
        if not slug_candidate:
            raise ValidationError("slug could not be derived from title", field="slug")

    def write() -> None:
        if title is not None:
            post.title = title
        if body is not None:
            post.body = body
            post.reading_time = calculate_reading_time(body)
        for name in ("excerpt", "cover_image", "cover_image_alt", "meta_title", "meta_description"):
            if name in provided:
                setattr(post, name, _clean_text(getattr(payload, name)))
        if payload.status is not None:
            post.status = payload.status.value
            if payload.status == PostStatus.PUBLISHED and post.published_at is None:
                post.published_at = datetime.now(UTC)
        if payload.published_at is not None:
            post.published_at = payload.published_at
        if decision.adopt:
            post.adopt(ctx.user_id)
            logger.info("post_adopted post_id=%s user_id=%s", post.id, ctx.user_id)
        db.flush()

        if slug_candidate is not None and slug_candidate != post.slug:
            save_with_unique_slug(db, post, slug_candidate, base_scope(Post.slug, exclude_id=post.id))
        for item in translations:
            _upsert_translation(db, post, item)
        if categories is not None:
            _replace_categories(db, post, categories)
        log_audit_event(
            db,
            action="post.updated",
            company_id=post.company_id,
            actor_id=ctx.user_id,
            metadata={"post_id": str(post.id), "adopted": decision.adopt},
        )

    _run_write(db, "update", write)
    db.refresh(post)
    return post


def delete_post(db: Session, ctx: ActorContext, post_id: UUID) -> None:
    post = _get_post(db, post_id)
    enforce(decide_post_write(ctx, post.ownership, post.company_id), operation="posts.delete", ctx=ctx)

    def write() -> None:
        log_audit_event(
            db,
            action="post.deleted",
            company_id=post.company_id,
            actor_id=ctx.user_id,
            metadata={"post_id": str(post.id), "slug": post.slug},
        )
        db.delete(post)

    _run_write(db, "delete", write)
    logger.info("post_deleted post_id=%s user_id=%s", post_id, ctx.user_id)


def _readable(ctx: ActorContext, post: Post | None) -> Post:
    if post is None or not decide_post_read(ctx, post.ownership, post.company_id, post.status).allowed:
        raise NotFoundError("Post not found")
    return post


def get_post(db: Session, ctx: ActorContext, post_id: UUID, locale: str) -> dict:
    post = _readable(ctx, db.get(Post, post_id))
    return localize_posts(db, [post], locale)[0]


def find_post_by_slug(db: Session, slug: str, locale: str) -> Post | None:
    return find_by_localized_slug(db, Post, PostTranslation, owner_attr="post_id", slug=slug, locale=locale)


def get_post_by_slug(db: Session, ctx: ActorContext, slug: str, locale: str) -> dict:
    post = _readable(ctx, find_post_by_slug(db, slug, locale))
    return localize_posts(db, [post], locale)[0]


def translate_post_slug(db: Session, slug: str, source_locale: str, target_locale: str) -> str:
    """Map a published post's slug in one locale to its slug in another, for locale switchers."""
    post = find_post_by_slug(db, slug, source_locale)
    if post is None or post.status != PostStatus.PUBLISHED.value:
        return slug
    target = db.execute(
        select(PostTranslation.slug).where(
            PostTranslation.post_id == post.id, PostTranslation.locale == target_locale
        )
    ).scalar_one_or_none()
    return target or post.slug
