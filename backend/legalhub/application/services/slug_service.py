import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute, Session

from legalhub.core.config import settings
from legalhub.core.errors import ConflictError, StoreError
from legalhub.infrastructure.observability.metrics import record_slug_collision

logger = logging.getLogger(__name__)

_QUOTES_RE = re.compile("[\"'`‘’“”]")
_SEPARATOR_RE = re.compile(r"[\W_]+")


def slugify(text: str | None, locale: str | None = None) -> str:
    """Build a URL-safe slug that keeps Georgian and Cyrillic letters.

    Quotes are dropped before separators are substituted, so "Tom's" becomes "toms".
    Python's case mapping is locale independent, so ``locale`` only documents the caller's intent.
    """
    base = (text or "").strip()
    if not base:
        return ""
    lowered = unicodedata.normalize("NFKC", base).lower()
    without_quotes = _QUOTES_RE.sub("", lowered)
    return _SEPARATOR_RE.sub("-", without_quotes).strip("-")


@dataclass(frozen=True)
class SlugScope:
    slug_column: InstrumentedAttribute
    locale_column: InstrumentedAttribute | None = None
    locale: str | None = None
    exclude_column: InstrumentedAttribute | None = None
    exclude_value: Any = None

    @property
    def table_name(self) -> str:
        return self.slug_column.class_.__tablename__

    def exists(self, db: Session, slug: str) -> bool:
        query = select(self.slug_column).where(self.slug_column == slug)
        if self.locale_column is not None:
            query = query.where(self.locale_column == self.locale)
        if self.exclude_column is not None and self.exclude_value is not None:
            query = query.where(self.exclude_column != self.exclude_value)
        return db.execute(query.limit(1)).first() is not None


def base_scope(slug_column: InstrumentedAttribute, *, exclude_id: Any = None) -> SlugScope:
    model = slug_column.class_
    return SlugScope(slug_column=slug_column, exclude_column=model.id, exclude_value=exclude_id)


def translation_scope(
    slug_column: InstrumentedAttribute,
    *,
    locale: str,
    owner_column: InstrumentedAttribute,
    owner_id: Any = None,
) -> SlugScope:
    model = slug_column.class_
    return SlugScope(
        slug_column=slug_column,
        locale_column=model.locale,
        locale=locale,
        exclude_column=owner_column,
        exclude_value=owner_id,
    )


def resolve_unique_slug(db: Session, candidate: str, scope: SlugScope, *, max_attempts: int | None = None) -> str:
    limit = max_attempts if max_attempts is not None else settings.slug_max_attempts
    if not scope.exists(db, candidate):
        return candidate
    for counter in range(1, limit + 1):
        suffixed = f"{candidate}-{counter}"
        if not scope.exists(db, suffixed):
            record_slug_collision(scope.table_name, counter)
            return suffixed
    logger.warning("slug_attempts_exhausted table=%s candidate=%s attempts=%s", scope.table_name, candidate, limit)
    raise ConflictError(
        f"Could not find a free slug for '{candidate}'",
        error_code="slug_conflict",
        field="slug",
    )


def save_with_unique_slug(
    db: Session,
    instance: Any,
    candidate: str,
    scope: SlugScope,
    *,
    slug_attr: str = "slug",
) -> str:
    """Assign a free slug to ``instance`` and flush it, retrying when a concurrent writer wins the race.

    The flush runs inside a SAVEPOINT so a unique violation only discards the slug attempt.
    Persistent instances must have their other pending changes flushed before the call,
    because rolling back the savepoint expires them.
    """
    limit = settings.slug_max_attempts
    for _ in range(limit):
        slug = resolve_unique_slug(db, candidate, scope)
        setattr(instance, slug_attr, slug)
        try:
            with db.begin_nested():
                db.add(instance)
                db.flush()
        except IntegrityError as exc:
            if scope.exists(db, slug):
                logger.info("slug_race_retry table=%s slug=%s", scope.table_name, slug)
                continue
            raise StoreError("Failed to store record") from exc
        return slug
    raise ConflictError(
        f"Could not find a free slug for '{candidate}'",
        error_code="slug_conflict",
        field="slug",
    )
