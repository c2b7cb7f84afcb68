import uuid

from sqlalchemy import select

from legalhub.application.services.affiliation_service import (
    build_actor_context,
    find_specialist_profile_for_actor,
    resolve_company_id,
    users_for_specialist_profiles,
)
from legalhub.domain.actor import ANONYMOUS, Actor
from legalhub.domain.models.specialist_profile import SpecialistProfile
from legalhub.domain.models.user import UserRole

from factories import actor_for, make_company, make_specialist_profile, make_user


def test_session_company_wins_over_stale_stored_company(db_session):
    current = make_company(db_session, "current-firm")
    stale = make_company(db_session, "stale-firm")
    user = make_user(db_session, UserRole.COMPANY, company=stale)

    actor = Actor(role=UserRole.COMPANY, user_id=user.id, company_id=current.id)

    assert resolve_company_id(db_session, actor) == current.id


def test_stored_company_used_when_session_has_none(db_session):
    company = make_company(db_session, "stored-firm")
    user = make_user(db_session, UserRole.COMPANY, company=company)

    assert resolve_company_id(db_session, actor_for(user, with_company_claim=False)) == company.id


def test_session_slug_resolves_company(db_session):
    company = make_company(db_session, "slug-firm")
    user = make_user(db_session, UserRole.COMPANY)

    actor = Actor(role=UserRole.COMPANY, user_id=user.id, company_slug="slug-firm")

    assert resolve_company_id(db_session, actor) == company.id


def test_stored_legacy_slug_resolves_company(db_session):
    company = make_company(db_session, "legacy-firm")
    user = make_user(db_session, UserRole.COMPANY, company_slug="legacy-firm")

    assert resolve_company_id(db_session, actor_for(user)) == company.id


def test_unresolvable_affiliation_is_none_not_error(db_session):
    user = make_user(db_session, UserRole.SPECIALIST, company_slug="missing-firm")

    assert resolve_company_id(db_session, actor_for(user)) is None


def test_unknown_user_without_claims_resolves_to_none(db_session):
    actor = Actor(role=UserRole.SUBSCRIBER, user_id=uuid.uuid4())

    assert resolve_company_id(db_session, actor) is None


def test_anonymous_context(db_session):
    ctx = build_actor_context(db_session, None)

    assert ctx is ANONYMOUS
    assert ctx.is_anonymous
    assert ctx.company_id is None
    assert not ctx.has_role(UserRole.SUPER_ADMIN)


def test_specialist_profile_found_by_contact_email(db_session):
    company = make_company(db_session, "email-firm")
    user = make_user(db_session, UserRole.SPECIALIST, email="lawyer@example.test")
    profile = make_specialist_profile(db_session, "lawyer", company=company, contact_email="lawyer@example.test")

    found = find_specialist_profile_for_actor(db_session, actor_for(user))

    assert found is not None
    assert found.id == profile.id


def test_users_for_specialist_profiles_match_contact_email(db_session):
    profile = make_specialist_profile(db_session, "nino", contact_email="nino@example.test")
    make_specialist_profile(db_session, "no-email")
    nino = make_user(db_session, UserRole.SPECIALIST, email="nino@example.test")
    make_user(db_session, UserRole.SPECIALIST)

    all_profiles = select(SpecialistProfile.id)
    one_profile = select(SpecialistProfile.id).where(SpecialistProfile.id == profile.id)

    assert db_session.execute(users_for_specialist_profiles(all_profiles)).scalars().all() == [nino.id]
    assert db_session.execute(users_for_specialist_profiles(one_profile)).scalars().all() == [nino.id]
