import uuid
from datetime import datetime
from enum import StrEnum

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legalhub.domain.ownership import Ownership, OwnedBy, claim, ownership_of
from legalhub.infrastructure.db.base import Base


class PostStatus(StrEnum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class PostScope(StrEnum):
    PUBLIC = "public"
    SPECIALIST = "specialist"
    COMPANY = "company"
    ADMIN = "admin"


class AuthorType(StrEnum):
    COMPANY = "COMPANY"
    SPECIALIST = "SPECIALIST"
    SUPER_ADMIN = "SUPER_ADMIN"


class Post(Base):
    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("status IN ('DRAFT', 'PUBLISHED')", name="ck_posts_status_values"),
        CheckConstraint(
            "author_type IN ('COMPANY', 'SPECIALIST', 'SUPER_ADMIN')",
            name="ck_posts_author_type_values",
        ),
        Index("ix_posts_created_at_id", "created_at", "id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    cover_image_alt: Mapped[str | None] = mapped_column(String(512), nullable=True)
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=PostStatus.DRAFT.value)
    author_type: Mapped[str] = mapped_column(String(16), nullable=False, default=AuthorType.COMPANY.value)
    author_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    company_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True
    )
    locale: Mapped[str] = mapped_column(String(8), nullable=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reading_time: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    translations: Mapped[list["PostTranslation"]] = relationship(
        back_populates="post", cascade="all, delete-orphan", passive_deletes=True
    )
    category_links: Mapped[list["PostCategory"]] = relationship(
        back_populates="post", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def ownership(self) -> Ownership:
        return ownership_of(self.author_id)

    def adopt(self, user_id: uuid.UUID) -> OwnedBy:
        owner = claim(self.ownership, user_id)
        self.author_id = owner.user_id
        return owner


class PostTranslation(Base):
    __tablename__ = "post_translations"
    __table_args__ = (
        UniqueConstraint("post_id", "locale", name="uq_post_translations_post_locale"),
        UniqueConstraint("locale", "slug", name="uq_post_translations_locale_slug"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    locale: Mapped[str] = mapped_column(String(8), nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image_alt: Mapped[str | None] = mapped_column(String(512), nullable=True)

    post: Mapped[Post] = relationship(back_populates="translations")


class PostCategory(Base):
    __tablename__ = "post_categories"

    post_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )

    post: Mapped[Post] = relationship(back_populates="category_links")
