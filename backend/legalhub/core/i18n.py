from enum import StrEnum

from legalhub.core.config import settings


class Locale(StrEnum):
    KA = "ka"
    EN = "en"
    RU = "ru"


DEFAULT_LOCALE = Locale(settings.default_locale)


def is_locale(value: str | None) -> bool:
    return value is not None and value in settings.supported_locale_list


def normalize_locale(value: str | None) -> Locale:
    """Return a supported locale, falling back to the default one for unknown input."""
    if value is None:
        return DEFAULT_LOCALE
    candidate = value.strip().lower()
    if is_locale(candidate):
        return Locale(candidate)
    return DEFAULT_LOCALE
