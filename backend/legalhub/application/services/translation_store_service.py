"""Shared read/write helpers for the per-locale translation tables.

Every translation table pairs an owner foreign key with a locale, and keeps its slug unique per
locale. These helpers only add rows to the session; committing is left to the caller's unit of work.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from legalhub.application.services.slug_service import save_with_unique_slug, translation_scope


def clean_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def find_translation(db: Session, model: type, *, owner_attr: str, owner_id: UUID, locale: str) -> Any | None:
    owner_column = getattr(model, owner_attr)
    return db.execute(
        select(model).where(owner_column == owner_id, model.locale == locale)
    ).scalar_one_or_none()


def translations_by_owner(db: Session, model: type, *, owner_attr: str, owner_ids: list[UUID], locale: str) -> dict:
    if not owner_ids:
        return {}
    owner_column = getattr(model, owner_attr)
    rows = db.execute(select(model).where(owner_column.in_(owner_ids), model.locale == locale)).scalars().all()
    return {getattr(row, owner_attr): row for row in rows}


def upsert_translation(
    db: Session,
    model: type,
    *,
    owner_attr: str,
    owner_id: UUID,
    locale: str,
    values: dict[str, Any],
    slug: str | None,
    default_slug: str,
) -> Any:
    """Create or update the ``locale`` row of ``owner_id``.

    ``values`` holds only the fields the client sent, so omitted fields keep their stored value.
    An existing row keeps its slug unless ``slug`` is given; a new row falls back to ``default_slug``.
    Whenever a slug is written it is first made free within the locale.
    """
    translation = find_translation(db, model, owner_attr=owner_attr, owner_id=owner_id, locale=locale)
    is_new = translation is None
    if is_new:
        translation = model(locale=locale, **{owner_attr: owner_id})

    for name, value in values.items():
        setattr(translation, name, value)
    if not is_new:
        db.flush()

    scope = translation_scope(
        model.slug, locale=locale, owner_column=getattr(model, owner_attr), owner_id=owner_id
    )
    if is_new or slug:
        save_with_unique_slug(db, translation, slug or default_slug, scope)
    return translation


def find_by_localized_slug(
    db: Session, model: type, translation_model: type, *, owner_attr: str, slug: str, locale: str
) -> Any | None:
    """Resolve ``slug`` against the ``locale`` translations first, then against base slugs."""
    translated_ids = select(getattr(translation_model, owner_attr)).where(
        translation_model.locale == locale, translation_model.slug == slug
    )
    return db.execute(
        select(model)
        .where(or_(model.id.in_(translated_ids), model.slug == slug))
        .order_by(model.slug == slug)
        .limit(1)
    ).scalar_one_or_none()
