from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from legalhub.core.i18n import Locale
from legalhub.domain.models.post import AuthorType, PostScope, PostStatus


class PostTranslationPayload(BaseModel):
    locale: Locale
    title: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    excerpt: str | None = None
    body: str | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None
    cover_image_alt: str | None = Field(default=None, max_length=512)


class PostCreatePayload(BaseModel):
    title: str = Field(max_length=255)
    body: str
    slug: str | None = Field(default=None, max_length=255)
    excerpt: str | None = None
    cover_image: str | None = Field(default=None, max_length=1024)
    cover_image_alt: str | None = Field(default=None, max_length=512)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None
    status: PostStatus = PostStatus.DRAFT
    locale: Locale = Locale.KA
    author_type: AuthorType | None = None
    company_id: UUID | None = None
    scope: PostScope | None = None
    published_at: datetime | None = None
    category_ids: list[UUID] = Field(default_factory=list)
    translations: list[PostTranslationPayload] = Field(default_factory=list)


class PostUpdatePayload(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    body: str | None = None
    slug: str | None = Field(default=None, max_length=255)
    excerpt: str | None = None
    cover_image: str | None = Field(default=None, max_length=1024)
    cover_image_alt: str | None = Field(default=None, max_length=512)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None
    status: PostStatus | None = None
    published_at: datetime | None = None
    category_ids: list[UUID] | None = None
    translations: list[PostTranslationPayload] | None = None


class CompanyTranslationPayload(BaseModel):
    locale: Locale
    name: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = None
    short_desc: str | None = None
    long_desc: str | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None


class CompanyProfilePayload(BaseModel):
    company_id: UUID | None = None
    name: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = None
    short_desc: str | None = None
    long_desc: str | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    website: str | None = Field(default=None, max_length=512)
    address: str | None = Field(default=None, max_length=512)
    city: str | None = Field(default=None, max_length=128)
    map_link: str | None = None
    logo_url: str | None = Field(default=None, max_length=1024)
    translations: list[CompanyTranslationPayload] = Field(default_factory=list)


class SpecialistTranslationPayload(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    role: str | None = Field(default=None, max_length=255)
    bio: str | None = None
    philosophy: str | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None
    specializations: Any = None
    focus_areas: Any = None
    representative_matters: Any = None
    teaching_writing: Any = None
    credentials: Any = None
    values: Any = None


class CatalogTranslationPayload(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None


class CategoryCreatePayload(BaseModel):
    name: str = Field(max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    is_public: bool = True
    company_id: UUID | None = None
    global_category: bool = False
