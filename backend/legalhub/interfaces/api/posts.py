from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from legalhub.application.services import post_service
from legalhub.application.services.post_query_service import PostQuery, list_posts
from legalhub.core.config import settings
from legalhub.core.i18n import normalize_locale
from legalhub.domain.actor import ActorContext
from legalhub.domain.models.post import Post, PostCategory, PostScope, PostStatus, PostTranslation
from legalhub.domain.payloads import PostCreatePayload, PostUpdatePayload
from legalhub.infrastructure.db.session import get_db
from legalhub.interfaces.api.deps import get_actor_context, get_locale, require_actor

router = APIRouter(prefix="/posts", tags=["posts"])


def _serialize_post(db: Session, post: Post) -> dict:
    translations = db.execute(
        select(PostTranslation).where(PostTranslation.post_id == post.id).order_by(PostTranslation.locale.asc())
    ).scalars().all()
    category_ids = db.execute(
        select(PostCategory.category_id).where(PostCategory.post_id == post.id)
    ).scalars().all()
    return {
        "id": str(post.id),
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "body": post.body,
        "cover_image": post.cover_image,
        "cover_image_alt": post.cover_image_alt,
        "meta_title": post.meta_title,
        "meta_description": post.meta_description,
        "status": post.status,
        "author_type": post.author_type,
        "author_id": str(post.author_id) if post.author_id else None,
        "company_id": str(post.company_id) if post.company_id else None,
        "locale": post.locale,
        "published_at": post.published_at.isoformat() if post.published_at else None,
        "reading_time": post.reading_time,
        "category_ids": [str(category_id) for category_id in category_ids],
        "translations": [
            {
                "locale": row.locale,
                "title": row.title,
                "slug": row.slug,
                "excerpt": row.excerpt,
                "body": row.body,
                "meta_title": row.meta_title,
                "meta_description": row.meta_description,
                "cover_image_alt": row.cover_image_alt,
            }
            for row in translations
        ],
        "created_at": post.created_at.isoformat() if post.created_at else None,
        "updated_at": post.updated_at.isoformat() if post.updated_at else None,
    }


@router.get("", status_code=status.HTTP_200_OK)
def list_posts_endpoint(
    scope: PostScope = Query(default=PostScope.PUBLIC),
    status_filter: PostStatus | None = Query(default=None, alias="status"),
    category: str | None = Query(default=None, max_length=255),
    company: str | None = Query(default=None, max_length=255),
    author: str | None = Query(default=None, max_length=255),
    search: str | None = Query(default=None, max_length=255),
    cursor: UUID | None = Query(default=None),
    limit: int = Query(default=settings.posts_default_page_size, ge=1, le=settings.posts_max_page_size),
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
) -> dict:
    page = list_posts(
        db,
        ctx,
        PostQuery(
            locale=locale,
            scope=scope,
            status=status_filter,
            category=category,
            company=company,
            author=author,
            search=search,
            cursor=cursor,
            limit=limit,
        ),
    )
    return {
        "items": page.items,
        "has_more": page.has_more,
        "next_cursor": str(page.next_cursor) if page.next_cursor else None,
    }


@router.get("/slug-switch", status_code=status.HTTP_200_OK)
def switch_post_slug(
    slug: str = Query(min_length=1, max_length=255),
    source_locale: str = Query(alias="from"),
    target_locale: str = Query(alias="to"),
    db: Session = Depends(get_db),
) -> dict:
    target = normalize_locale(target_locale).value
    translated = post_service.translate_post_slug(db, slug, normalize_locale(source_locale).value, target)
    return {"slug": translated, "locale": target}


@router.get("/by-slug/{slug}", status_code=status.HTTP_200_OK)
def get_post_by_slug(
    slug: str,
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
) -> dict:
    return post_service.get_post_by_slug(db, ctx, slug, locale)


@router.get("/{post_id}", status_code=status.HTTP_200_OK)
def get_post(
    post_id: UUID,
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(get_actor_context),
) -> dict:
    return post_service.get_post(db, ctx, post_id, locale)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreatePayload,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> dict:
    post = post_service.create_post(db, ctx, payload)
    return _serialize_post(db, post)


@router.patch("/{post_id}", status_code=status.HTTP_200_OK)
def update_post(
    post_id: UUID,
    payload: PostUpdatePayload,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> dict:
    post = post_service.update_post(db, ctx, post_id, payload)
    return _serialize_post(db, post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: UUID,
    db: Session = Depends(get_db),
    ctx: ActorContext = Depends(require_actor),
) -> Response:
    post_service.delete_post(db, ctx, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
