import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import ColumnElement, and_, exists, or_, select, true
from sqlalchemy.orm import Session

from legalhub.application.services.affiliation_service import (
    users_for_specialist_profiles,
    users_matching_company_specialists,
)
from legalhub.application.services.authorization_service import require_roles
from legalhub.application.services.translation_merge_service import POST_MERGE_SPEC, merge_fields
from legalhub.core.config import settings
from legalhub.core.errors import ValidationError
from legalhub.domain.actor import ActorContext
from legalhub.domain.models.category import Category, CategoryTranslation
from legalhub.domain.models.company import Company, CompanyTranslation
from legalhub.domain.models.post import Post, PostCategory, PostScope, PostStatus, PostTranslation
from legalhub.domain.models.specialist_profile import SpecialistProfile, SpecialistProfileTranslation
from legalhub.domain.models.user import User, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostQuery:
    locale: str
    scope: PostScope = PostScope.PUBLIC
    status: PostStatus | None = None
    category: str | None = None
    company: str | None = None
    author: str | None = None
    search: str | None = None
    cursor: UUID | None = None
    limit: int = 20


@dataclass(frozen=True)
class PostPage:
    items: list[dict]
    has_more: bool
    next_cursor: UUID | None


def _translated_in(locale: str) -> ColumnElement[bool]:
    return exists().where(PostTranslation.post_id == Post.id, PostTranslation.locale == locale)


def _company_visibility(ctx: ActorContext) -> ColumnElement[bool]:
    own_posts = Post.author_id == ctx.user_id
    company_id = ctx.company_id
    if company_id is None:
        return own_posts
    return or_(
        Post.company_id == company_id,
        Post.author_id.in_(select(User.id).where(User.company_id == company_id)),
        Post.author_id.in_(users_matching_company_specialists(company_id)),
        own_posts,
    )


def _scope_predicate(ctx: ActorContext, query: PostQuery) -> ColumnElement[bool]:
    if query.scope == PostScope.PUBLIC:
        return and_(
            Post.status == PostStatus.PUBLISHED.value,
            or_(Post.locale == query.locale, _translated_in(query.locale)),
        )

    if query.scope == PostScope.SPECIALIST:
        require_roles(ctx, UserRole.SPECIALIST, operation="posts.list.specialist")
        predicate = Post.author_id == ctx.user_id
    elif query.scope == PostScope.COMPANY:
        require_roles(ctx, UserRole.COMPANY, UserRole.SUPER_ADMIN, operation="posts.list.company")
        predicate = true() if ctx.has_role(UserRole.SUPER_ADMIN) else _company_visibility(ctx)
    else:
        require_roles(ctx, UserRole.SUPER_ADMIN, operation="posts.list.admin")
        predicate = true()

    if query.status is not None:
        predicate = and_(predicate, Post.status == query.status.value)
    return predicate


def _category_predicate(slug: str, locale: str) -> ColumnElement[bool]:
    matching_categories = select(Category.id).where(
        or_(
            Category.slug == slug,
            Category.id.in_(
                select(CategoryTranslation.category_id).where(
                    CategoryTranslation.locale == locale, CategoryTranslation.slug == slug
                )
            ),
        )
    )
    return Post.id.in_(select(PostCategory.post_id).where(PostCategory.category_id.in_(matching_categories)))



def _company_predicate(slug: str, locale: str) -> ColumnElement[bool]:
    matching_companies = select(Company.id).where(
        or_(
            Company.slug == slug,
            Company.id.in_(
                select(CompanyTranslation.company_id).where(
                    CompanyTranslation.locale == locale, CompanyTranslation.slug == slug
                )
            ),
        )
    )
    return Post.company_id.in_(matching_companies)


def _author_predicate(slug: str, locale: str) -> ColumnElement[bool]:
    # Profiles are tied to accounts by contact email only.
    matching_profiles = select(SpecialistProfile.id).where(
        or_(
            SpecialistProfile.slug == slug,
            SpecialistProfile.id.in_(
                select(SpecialistProfileTranslation.specialist_profile_id).where(
                    SpecialistProfileTranslation.locale == locale, SpecialistProfileTranslation.slug == slug
                )
            ),
        )
    )
    return Post.author_id.in_(users_for_specialist_profiles(matching_profiles))

def _search_predicate(term: str, locale: str) -> ColumnElement[bool]:
    # LIKE keeps the store's own case rules.
    translated_match = exists().where(
        PostTranslation.post_id == Post.id,
        PostTranslation.locale == locale,
        or_(
            PostTranslation.title.contains(term, autoescape=True),
            PostTranslation.excerpt.contains(term, autoescape=True),
            PostTranslation.body.contains(term, autoescape=True),
        ),
    )
    return or_(
        Post.title.contains(term, autoescape=True),
        Post.excerpt.contains(term, autoescape=True),
        Post.body.contains(term, autoescape=True),
        translated_match,
    )


def build_post_filter(ctx: ActorContext, query: PostQuery) -> ColumnElement[bool]:
    """Compose the listing predicate: scope first, then the optional narrowing filters."""
    predicate = _scope_predicate(ctx, query)
    if query.company:
        predicate = and_(predicate, _company_predicate(query.company, query.locale))
    if query.author:
        predicate = and_(predicate, _author_predicate(query.author, query.locale))
    if query.category:
        predicate = and_(predicate, _category_predicate(query.category, query.locale))
    if query.search and query.search.strip():
        predicate = and_(predicate, _search_predicate(query.search.strip(), query.locale))
    return predicate


def _cursor_predicate(db: Session, cursor: UUID) -> ColumnElement[bool]:
    if db.get(Post, cursor) is None:
        raise ValidationError("Unknown cursor", field="cursor")
    # Compared in SQL so the stored timestamp representation is used on both sides.
    anchor_created_at = select(Post.created_at).where(Post.id == cursor).scalar_subquery()
    return or_(
        Post.created_at < anchor_created_at,
        and_(Post.created_at == anchor_created_at, Post.id < cursor),
    )


def localize_posts(db: Session, posts: list[Post], locale: str) -> list[dict]:
    if not posts:
        return []
    translations = db.execute(
        select(PostTranslation).where(
            PostTranslation.post_id.in_([post.id for post in posts]), PostTranslation.locale == locale
        )
    ).scalars().all()
    by_post = {row.post_id: row for row in translations}
    items = []
    for post in posts:
        item = merge_fields(post, by_post.get(post.id), POST_MERGE_SPEC, locale=locale)
        item["source_locale"] = post.locale
        items.append(item)
    return items


def list_posts(db: Session, ctx: ActorContext, query: PostQuery) -> PostPage:
    limit = max(1, min(query.limit, settings.posts_max_page_size))
    predicate = build_post_filter(ctx, query)
    if query.cursor is not None:
        predicate = and_(predicate, _cursor_predicate(db, query.cursor))

    rows = db.execute(
        select(Post).where(predicate).order_by(Post.created_at.desc(), Post.id.desc()).limit(limit + 1)
    ).scalars().all()
    has_more = len(rows) > limit
    page = list(rows[:limit])
    logger.debug(
        "posts_listed scope=%s locale=%s company_id=%s count=%s",
        query.scope,
        query.locale,
        ctx.company_id,
        len(page),
    )
    return PostPage(
        items=localize_posts(db, page, query.locale),
        has_more=has_more,
        next_cursor=page[-1].id if has_more else None,
    )
