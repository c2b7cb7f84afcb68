import uuid

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legalhub.infrastructure.db.base import Base


class SpecialistProfile(Base):
    __tablename__ = "specialist_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    philosophy: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    contact_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    company_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True
    )
    languages: Mapped[list | None] = mapped_column(JSON, nullable=True)
    specializations: Mapped[list | None] = mapped_column(JSON, nullable=True)
    focus_areas: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    representative_matters: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    teaching_writing: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    credentials: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    values: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    translations: Mapped[list["SpecialistProfileTranslation"]] = relationship(
        back_populates="specialist_profile", cascade="all, delete-orphan", passive_deletes=True
    )


class SpecialistProfileTranslation(Base):
    __tablename__ = "specialist_profile_translations"
    __table_args__ = (
        UniqueConstraint(
            "specialist_profile_id", "locale", name="uq_specialist_profile_translations_profile_locale"
        ),
        UniqueConstraint("locale", "slug", name="uq_specialist_profile_translations_locale_slug"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    specialist_profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("specialist_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    locale: Mapped[str] = mapped_column(String(8), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    philosophy: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    specializations: Mapped[list | None] = mapped_column(JSON, nullable=True)
    focus_areas: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    representative_matters: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    teaching_writing: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    credentials: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)
    values: Mapped[list | dict | None] = mapped_column(JSON, nullable=True)

    specialist_profile: Mapped[SpecialistProfile] = relationship(back_populates="translations")
