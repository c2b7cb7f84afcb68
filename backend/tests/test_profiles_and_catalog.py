import pytest
from sqlalchemy import select

from legalhub.application.services import catalog_service, category_service, company_service, specialist_service
from legalhub.core.errors import ForbiddenError, NotFoundError, ValidationError
from legalhub.domain.actor import ANONYMOUS
from legalhub.domain.models.category import Category, CategoryType
from legalhub.domain.models.company import CompanyTranslation
from legalhub.domain.models.practice_area import PracticeArea, Service
from legalhub.domain.models.user import UserRole
from legalhub.domain.payloads import (
    CatalogTranslationPayload,
    CategoryCreatePayload,
    CompanyProfilePayload,
    CompanyTranslationPayload,
    SpecialistTranslationPayload,
)

from factories import context_for, make_category, make_company, make_specialist_profile, make_user


def test_company_category_created_for_resolved_company(db_session):
    firm = make_company(db_session, "firm-a")
    owner = make_user(db_session, UserRole.COMPANY, company=firm)

    category = category_service.create_category(
        db_session, context_for(db_session, owner), CategoryCreatePayload(name="Firm News", global_category=True)
    )

    assert category.type == CategoryType.COMPANY.value
    assert category.company_id == firm.id
    assert category.slug == "firm-news"


def test_super_admin_creates_global_category(db_session):
    admin = make_user(db_session, UserRole.SUPER_ADMIN)
    make_category(db_session, "tax")

    category = category_service.create_category(
        db_session, context_for(db_session, admin), CategoryCreatePayload(name="Tax", global_category=True)
    )

    assert category.type == CategoryType.GLOBAL.value
    assert category.company_id is None
    assert category.slug == "tax-1"


def test_specialist_cannot_create_categories(db_session):
    specialist = make_user(db_session, UserRole.SPECIALIST)

    with pytest.raises(ForbiddenError):
        category_service.create_category(db_session, context_for(db_session, specialist), CategoryCreatePayload(name="x"))


def test_category_listing_hides_other_companies(db_session):
    firm_a = make_company(db_session, "firm-a")
    firm_b = make_company(db_session, "firm-b")
    make_category(db_session, "news")
    make_category(db_session, "firm-a-news", company=firm_a)
    make_category(db_session, "firm-b-news", company=firm_b)
    owner_a = make_user(db_session, UserRole.COMPANY, company=firm_a)

    own_view = category_service.list_categories(db_session, context_for(db_session, owner_a), "ka")
    public_view = category_service.list_categories(db_session, ANONYMOUS, "ka")

    assert {item["slug"] for item in own_view} == {"news", "firm-a-news"}
    assert {item["slug"] for item in public_view} == {"news"}


def test_category_delete_limited_to_own_company(db_session):
    firm_a = make_company(db_session, "firm-a")
    firm_b = make_company(db_session, "firm-b")
    category = make_category(db_session, "firm-a-news", company=firm_a)
    global_category = make_category(db_session, "news")
    owner_a = make_user(db_session, UserRole.COMPANY, company=firm_a)
    owner_b = make_user(db_session, UserRole.COMPANY, company=firm_b)

    with pytest.raises(ForbiddenError):
        category_service.delete_category(db_session, context_for(db_session, owner_b), category.id)
    with pytest.raises(ForbiddenError):
        category_service.delete_category(db_session, context_for(db_session, owner_a), global_category.id)

    category_service.delete_category(db_session, context_for(db_session, owner_a), category.id)
    assert db_session.execute(select(Category.slug)).scalars().all() == ["news"]


def test_company_profile_update_with_translations(db_session):
    firm = make_company(db_session, "firm-a", name="ფირმა")
    owner = make_user(db_session, UserRole.COMPANY, company=firm)

    profile = company_service.update_company_profile(
        db_session,
        context_for(db_session, owner),
        CompanyProfilePayload(
            city="Tbilisi",
            email="  office@firm-a.test ",
            translations=[CompanyTranslationPayload(locale="en", name="Firm A", short_desc="Tax boutique")],
        ),
    )

    assert profile["city"] == "Tbilisi"
    assert profile["email"] == "office@firm-a.test"
    assert profile["translations"] == [
        {
            "locale": "en",
            "slug": "firm-a",
            "name": "Firm A",
            "description": None,
            "short_desc": "Tax boutique",
            "long_desc": None,
            "meta_title": None,
            "meta_description": None,
        }
    ]

    localized = company_service.get_company(db_session, "firm-a", "en")
    assert localized["name"] == "Firm A"
    assert localized["short_desc"] == "Tax boutique"
    assert localized["is_translated"] is True
    assert company_service.get_company(db_session, "firm-a", "ka")["name"] == "ფირმა"


def test_company_profile_requires_resolved_company(db_session):
    unaffiliated = make_user(db_session, UserRole.COMPANY)
    admin = make_user(db_session, UserRole.SUPER_ADMIN)

    with pytest.raises(NotFoundError):
        company_service.update_company_profile(
            db_session, context_for(db_session, unaffiliated), CompanyProfilePayload(city="Batumi")
        )
    with pytest.raises(ValidationError) as exc_info:
        company_service.update_company_profile(
            db_session, context_for(db_session, admin), CompanyProfilePayload(city="Batumi")
        )
    assert exc_info.value.field == "company_id"


def test_company_profile_rejected_update_applies_nothing(db_session):
    firm = make_company(db_session, "firm-a")
    owner = make_user(db_session, UserRole.COMPANY, company=firm)

    with pytest.raises(ValidationError):
        company_service.update_company_profile(
            db_session,
            context_for(db_session, owner),
            CompanyProfilePayload(
                city="Kutaisi",
                translations=[
                    CompanyTranslationPayload(locale="en", name="One"),
                    CompanyTranslationPayload(locale="en", name="Two"),
                ],
            ),
        )

    db_session.expire_all()
    assert company_service.get_company(db_session, "firm-a", "ka")["city"] is None
    assert db_session.execute(select(CompanyTranslation)).first() is None


def test_get_company_unknown_slug(db_session):
    with pytest.raises(NotFoundError):
        company_service.get_company(db_session, "missing", "ka")


def test_specialist_translation_accepts_encoded_composites(db_session):
    firm = make_company(db_session, "firm-a")
    profile = make_specialist_profile(
        db_session,
        "ნინო-ბერიძე",
        company=firm,
        contact_email="nino@firm-a.test",
        specializations=["საგადასახადო სამართალი"],
    )
    specialist = make_user(db_session, UserRole.SPECIALIST, email="nino@firm-a.test")

    saved = specialist_service.upsert_specialist_translation(
        db_session,
        context_for(db_session, specialist),
        profile.id,
        "en",
        SpecialistTranslationPayload(
            name="Nino Beridze",
            specializations='["Tax law", "M&A"]',
            credentials={"education": ["LSE"]},
            values="",
        ),
    )

    assert saved["name"] == "Nino Beridze"
    assert saved["slug"] == "nino-beridze"
    assert saved["specializations"] == ["Tax law", "M&A"]
    assert saved["credentials"] == {"education": ["LSE"]}

    fetched = specialist_service.get_specialist(db_session, "nino-beridze", "en")
    assert fetched["name"] == "Nino Beridze"
    assert fetched["company"] == {"slug": "firm-a", "name": "Firm A"}


def test_specialist_translation_rejects_malformed_composite(db_session):
    profile = make_specialist_profile(db_session, "lawyer", contact_email="lawyer@example.test")
    admin = make_user(db_session, UserRole.SUPER_ADMIN)

    with pytest.raises(ValidationError) as exc_info:
        specialist_service.upsert_specialist_translation(
            db_session,
            context_for(db_session, admin),
            profile.id,
            "en",
            SpecialistTranslationPayload(focus_areas="{not json"),
        )
    assert exc_info.value.field == "focus_areas"


def test_specialist_translation_denied_for_other_specialists(db_session):
    profile = make_specialist_profile(db_session, "lawyer", contact_email="lawyer@example.test")
    other = make_user(db_session, UserRole.SPECIALIST, email="other@example.test")

    with pytest.raises(ForbiddenError):
        specialist_service.upsert_specialist_translation(
            db_session,
            context_for(db_session, other),
            profile.id,
            "en",
            SpecialistTranslationPayload(name="Lawyer"),
        )


def _catalog(db_session):
    area = PracticeArea(slug="საგადასახადო-სამართალი", title="საგადასახადო სამართალი")
    db_session.add(area)
    db_session.flush()
    service = Service(practice_area_id=area.id, slug="აუდიტი", title="აუდიტი")
    db_session.add(service)
    db_session.commit()
    return area, service


def test_catalog_translations_are_super_admin_only(db_session):
    area, _ = _catalog(db_session)
    owner = make_user(db_session, UserRole.COMPANY, company=make_company(db_session, "firm-a"))

    with pytest.raises(ForbiddenError):
        catalog_service.upsert_practice_area_translation(
            db_session, context_for(db_session, owner), area.id, "en", CatalogTranslationPayload(title="Tax Law")
        )


def test_practice_area_localized_with_services(db_session):
    area, service = _catalog(db_session)
    ctx = context_for(db_session, make_user(db_session, UserRole.SUPER_ADMIN))

    catalog_service.upsert_practice_area_translation(
        db_session, ctx, area.id, "en", CatalogTranslationPayload(title="Tax Law")
    )
    catalog_service.upsert_service_translation(db_session, ctx, service.id, "en", CatalogTranslationPayload(title="Audit"))

    localized = catalog_service.get_practice_area(db_session, "tax-law", "en")

    assert localized["title"] == "Tax Law"
    assert [item["slug"] for item in localized["services"]] == ["audit"]
    assert catalog_service.get_service(db_session, "audit", "en")["title"] == "Audit"
    assert catalog_service.list_practice_areas(db_session, "ka")[0]["title"] == "საგადასახადო სამართალი"


def test_partial_company_translation_keeps_edited_slug_and_fields(db_session):
    firm = make_company(db_session, "firm-a")
    ctx = context_for(db_session, make_user(db_session, UserRole.COMPANY, company=firm))
    company_service.update_company_profile(
        db_session,
        ctx,
        CompanyProfilePayload(
            translations=[CompanyTranslationPayload(locale="en", name="Firm A", slug="firm-a-tbilisi")]
        ),
    )

    profile = company_service.update_company_profile(
        db_session,
        ctx,
        CompanyProfilePayload(translations=[CompanyTranslationPayload(locale="en", meta_title="Tax boutique")]),
    )

    translation = profile["translations"][0]
    assert translation["slug"] == "firm-a-tbilisi"
    assert translation["name"] == "Firm A"
    assert translation["meta_title"] == "Tax boutique"


def test_explicit_slug_renames_existing_company_translation(db_session):
    firm = make_company(db_session, "firm-a")
    ctx = context_for(db_session, make_user(db_session, UserRole.COMPANY, company=firm))
    company_service.update_company_profile(
        db_session, ctx, CompanyProfilePayload(translations=[CompanyTranslationPayload(locale="en", name="Firm A")])
    )

    profile = company_service.update_company_profile(
        db_session,
        ctx,
        CompanyProfilePayload(translations=[CompanyTranslationPayload(locale="en", slug="Firm A Batumi")]),
    )

    assert profile["translations"][0]["slug"] == "firm-a-batumi"
    assert profile["translations"][0]["name"] == "Firm A"


def test_partial_specialist_translation_keeps_slug_and_composites(db_session):
    profile = make_specialist_profile(db_session, "lawyer", contact_email="lawyer@example.test")
    ctx = context_for(db_session, make_user(db_session, UserRole.SUPER_ADMIN))
    specialist_service.upsert_specialist_translation(
        db_session,
        ctx,
        profile.id,
        "en",
        SpecialistTranslationPayload(name="Lawyer", slug="senior-lawyer", specializations=["Tax law"]),
    )

    saved = specialist_service.upsert_specialist_translation(
        db_session, ctx, profile.id, "en", SpecialistTranslationPayload(bio="Twenty years in practice")
    )

    assert saved["slug"] == "senior-lawyer"
    assert saved["name"] == "Lawyer"
    assert saved["specializations"] == ["Tax law"]
    assert saved["bio"] == "Twenty years in practice"
