from dataclasses import dataclass, field
from typing import Any

from legalhub.domain.composite import is_empty_composite


@dataclass(frozen=True)
class MergeSpec:
    """Fields of a localizable entity that translation rows may override.

    ``text_fields`` fall back per field when the translated value is blank. ``composite_fields``
    hold whole list/map values: one side wins outright and the other side is discarded.
    ``base_fields`` are copied from the base record untouched.
    """

    text_fields: tuple[str, ...]
    composite_fields: tuple[str, ...] = ()
    base_fields: tuple[str, ...] = field(default_factory=tuple)


POST_MERGE_SPEC = MergeSpec(
    text_fields=("title", "slug", "excerpt", "body", "meta_title", "meta_description", "cover_image_alt"),
    base_fields=(
        "id",
        "status",
        "author_type",
        "author_id",
        "company_id",
        "cover_image",
        "published_at",
        "reading_time",
        "created_at",
        "updated_at",
    ),
)

COMPANY_MERGE_SPEC = MergeSpec(
    text_fields=("name", "slug", "description", "short_desc", "long_desc", "meta_title", "meta_description"),
    base_fields=("id", "email", "phone", "website", "address", "city", "map_link", "logo_url"),
)

SPECIALIST_MERGE_SPEC = MergeSpec(
    text_fields=("name", "slug", "role", "bio", "philosophy", "meta_title", "meta_description"),
    composite_fields=(
        "specializations",
        "focus_areas",
        "representative_matters",
        "teaching_writing",
        "credentials",
        "values",
    ),
    base_fields=("id", "languages", "contact_email", "contact_phone", "city", "avatar_url", "company_id"),
)

PRACTICE_AREA_MERGE_SPEC = MergeSpec(
    text_fields=("title", "slug", "description", "meta_title", "meta_description"),
    base_fields=("id", "hero_image_url"),
)

SERVICE_MERGE_SPEC = MergeSpec(
    text_fields=("title", "slug", "description", "meta_title", "meta_description"),
    base_fields=("id", "practice_area_id"),
)

CATEGORY_MERGE_SPEC = MergeSpec(
    text_fields=("name", "slug"),
    base_fields=("id", "type", "company_id", "is_public"),
)


def merge_text(base_value: Any, translated_value: Any) -> Any:
    if isinstance(translated_value, str) and translated_value.strip():
        return translated_value
    return base_value


def merge_composite(base_value: Any, translated_value: Any) -> Any:
    if is_empty_composite(translated_value):
        return base_value
    return translated_value


def merge_fields(base: Any, translation: Any | None, spec: MergeSpec, *, locale: str) -> dict:
    """Resolve the effective view of ``base`` for ``locale``; the merge never touches the store."""
    effective: dict[str, Any] = {name: getattr(base, name, None) for name in spec.base_fields}
    for name in spec.text_fields:
        translated = getattr(translation, name, None) if translation is not None else None
        effective[name] = merge_text(getattr(base, name, None), translated)
    for name in spec.composite_fields:
        translated = getattr(translation, name, None) if translation is not None else None
        effective[name] = merge_composite(getattr(base, name, None), translated)
    effective["locale"] = locale
    effective["is_translated"] = translation is not None
    return effective
