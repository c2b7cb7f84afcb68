import uuid

from sqlalchemy.orm import Session

from legalhub.application.services.affiliation_service import build_actor_context
from legalhub.core.security import create_access_token
from legalhub.domain.actor import Actor, ActorContext
from legalhub.domain.models.category import Category, CategoryType
from legalhub.domain.models.company import Company
from legalhub.domain.models.specialist_profile import SpecialistProfile
from legalhub.domain.models.user import User, UserRole


def make_company(db: Session, slug: str, name: str | None = None) -> Company:
    company = Company(slug=slug, name=name or slug.replace("-", " ").title())
    db.add(company)
    db.commit()
    return company


def make_user(
    db: Session,
    role: UserRole,
    *,
    company: Company | None = None,
    email: str | None = None,
    company_slug: str | None = None,
) -> User:
    user = User(
        email=email or f"{role.value.lower()}-{uuid.uuid4().hex[:8]}@example.test",
        role=role.value,
        company_id=company.id if company else None,
        company_slug=company_slug,
    )
    db.add(user)
    db.commit()
    return user


def make_specialist_profile(
    db: Session, slug: str, *, company: Company | None = None, contact_email: str | None = None, **fields
) -> SpecialistProfile:
    profile = SpecialistProfile(
        slug=slug,
        name=fields.pop("name", slug.replace("-", " ").title()),
        company_id=company.id if company else None,
        contact_email=contact_email,
        **fields,
    )
    db.add(profile)
    db.commit()
    return profile


def make_category(db: Session, slug: str, *, company: Company | None = None) -> Category:
    category = Category(
        name=slug.replace("-", " ").title(),
        slug=slug,
        type=CategoryType.COMPANY.value if company else CategoryType.GLOBAL.value,
        company_id=company.id if company else None,
    )
    db.add(category)
    db.commit()
    return category


def actor_for(user: User, *, with_company_claim: bool = True) -> Actor:
    return Actor(
        role=UserRole(user.role),
        user_id=user.id,
        company_id=user.company_id if with_company_claim else None,
        email=user.email,
    )


def context_for(db: Session, user: User) -> ActorContext:
    return build_actor_context(db, actor_for(user))


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.role, company_id=user.company_id, email=user.email)
    return {"Authorization": f"Bearer {token}"}
