"""Company affiliation for the acting user.

Company linkage is established at different moments (registration, later assignment by an admin),
so the cheapest value already carried by the session wins and the store is consulted only when it
is missing. Not finding a company is a normal outcome: the actor then acts only as themselves.

The email helpers at the bottom bridge specialist profiles that were never linked to a user
account. They are the only place that matches identities by email.
"""

import logging
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from legalhub.domain.actor import ANONYMOUS, Actor, ActorContext
from legalhub.domain.models.company import Company
from legalhub.domain.models.specialist_profile import SpecialistProfile
from legalhub.domain.models.user import User

logger = logging.getLogger(__name__)


def resolve_company_id(db: Session, actor: Actor | None) -> UUID | None:
    if actor is None:
        return None
    if actor.company_id is not None:
        return actor.company_id

    stored = db.execute(
        select(User.company_id, User.company_slug).where(User.id == actor.user_id)
    ).one_or_none()
    if stored is not None and stored.company_id is not None:
        return stored.company_id

    company_slug = actor.company_slug or (stored.company_slug if stored is not None else None)
    if company_slug:
        company_id = db.execute(select(Company.id).where(Company.slug == company_slug)).scalar_one_or_none()
        if company_id is not None:
            return company_id
        logger.info("company_slug_unresolved user_id=%s company_slug=%s", actor.user_id, company_slug)

    return None


def build_actor_context(db: Session, actor: Actor | None) -> ActorContext:
    if actor is None:
        return ANONYMOUS
    return ActorContext(actor=actor, company_id=resolve_company_id(db, actor))


def specialist_emails_for_company(company_id: UUID) -> Select:
    return select(SpecialistProfile.contact_email).where(
        SpecialistProfile.company_id == company_id,
        SpecialistProfile.contact_email.is_not(None),
    )


def users_matching_company_specialists(company_id: UUID) -> Select:
    return select(User.id).where(User.email.in_(specialist_emails_for_company(company_id)))


def users_for_specialist_profiles(profile_ids: Select) -> Select:
    """Users whose email is the contact email of one of ``profile_ids``."""
    contact_emails = select(SpecialistProfile.contact_email).where(
        SpecialistProfile.id.in_(profile_ids),
        SpecialistProfile.contact_email.is_not(None),
    )
    return select(User.id).where(User.email.in_(contact_emails))


def find_specialist_profile_for_actor(db: Session, actor: Actor) -> SpecialistProfile | None:
    if not actor.email:
        return None
    return db.execute(
        select(SpecialistProfile).where(SpecialistProfile.contact_email == actor.email).limit(1)
    ).scalar_one_or_none()
