import pytest

from legalhub.application.services.post_query_service import PostQuery, list_posts
from legalhub.core.errors import ForbiddenError
from legalhub.domain.actor import ANONYMOUS
from legalhub.domain.models.company import CompanyTranslation
from legalhub.domain.models.post import AuthorType, Post, PostCategory, PostScope, PostStatus, PostTranslation
from legalhub.domain.models.specialist_profile import SpecialistProfileTranslation
from legalhub.domain.models.user import UserRole

from factories import context_for, make_category, make_company, make_specialist_profile, make_user


def _post(db, slug: str, *, author=None, company=None, status=PostStatus.DRAFT, locale="ka", **fields) -> Post:
    post = Post(
        title=fields.pop("title", slug.replace("-", " ").title()),
        slug=slug,
        body=fields.pop("body", "<p>body</p>"),
        status=status.value,
        author_type=AuthorType.COMPANY.value,
        author_id=author.id if author else None,
        company_id=company.id if company else None,
        locale=locale,
        **fields,
    )
    db.add(post)
    db.commit()
    return post


def _slugs(page) -> set[str]:
    return {item["slug"] for item in page.items}


@pytest.fixture
def company_world(db_session):
    firm_a = make_company(db_session, "firm-a")
    firm_b = make_company(db_session, "firm-b")
    owner_a = make_user(db_session, UserRole.COMPANY, company=firm_a)
    owner_b = make_user(db_session, UserRole.COMPANY, company=firm_b)
    colleague_a = make_user(db_session, UserRole.SPECIALIST, company=firm_a)
    legacy_specialist = make_user(db_session, UserRole.SPECIALIST, email="legacy@firm-a.test")
    make_specialist_profile(db_session, "legacy-lawyer", company=firm_a, contact_email="legacy@firm-a.test")

    _post(db_session, "direct-a", company=firm_a)
    _post(db_session, "colleague-a", author=colleague_a)
    _post(db_session, "legacy-email-a", author=legacy_specialist)
    _post(db_session, "own-personal", author=owner_a)
    _post(db_session, "direct-b", company=firm_b)
    _post(db_session, "unrelated")
    return {"owner_a": owner_a, "owner_b": owner_b, "legacy_specialist": legacy_specialist}


def test_company_scope_unions_all_visibility_paths(db_session, company_world):
    ctx = context_for(db_session, company_world["owner_a"])

    page = list_posts(db_session, ctx, PostQuery(locale="ka", scope=PostScope.COMPANY))

    assert _slugs(page) == {"direct-a", "colleague-a", "legacy-email-a", "own-personal"}


def test_email_matched_post_excluded_for_other_company(db_session, company_world):
    ctx = context_for(db_session, company_world["owner_b"])

    page = list_posts(db_session, ctx, PostQuery(locale="ka", scope=PostScope.COMPANY))

    assert _slugs(page) == {"direct-b"}


def test_company_scope_without_resolved_company_keeps_own_posts(db_session, company_world):
    unaffiliated = make_user(db_session, UserRole.COMPANY)
    _post(db_session, "unaffiliated-own", author=unaffiliated)

    page = list_posts(db_session, context_for(db_session, unaffiliated), PostQuery(locale="ka", scope=PostScope.COMPANY))

    assert _slugs(page) == {"unaffiliated-own"}


def test_company_scope_super_admin_sees_everything(db_session, company_world):
    admin = make_user(db_session, UserRole.SUPER_ADMIN)

    page = list_posts(db_session, context_for(db_session, admin), PostQuery(locale="ka", scope=PostScope.COMPANY))

    assert len(page.items) == 6


@pytest.mark.parametrize(
    ("role", "scope"),
    [
        (UserRole.SUBSCRIBER, PostScope.COMPANY),
        (UserRole.SPECIALIST, PostScope.COMPANY),
        (UserRole.COMPANY, PostScope.SPECIALIST),
        (UserRole.COMPANY, PostScope.ADMIN),
    ],
)
def test_restricted_scopes_deny_other_roles(db_session, role, scope):
    user = make_user(db_session, role)

    with pytest.raises(ForbiddenError):
        list_posts(db_session, context_for(db_session, user), PostQuery(locale="ka", scope=scope))


def test_anonymous_cannot_use_private_scopes(db_session):
    with pytest.raises(ForbiddenError):
        list_posts(db_session, ANONYMOUS, PostQuery(locale="ka", scope=PostScope.SPECIALIST))


def test_specialist_scope_lists_own_posts_with_optional_status(db_session):
    specialist = make_user(db_session, UserRole.SPECIALIST)
    other = make_user(db_session, UserRole.SPECIALIST)
    _post(db_session, "mine-draft", author=specialist)
    _post(db_session, "mine-published", author=specialist, status=PostStatus.PUBLISHED)
    _post(db_session, "theirs", author=other, status=PostStatus.PUBLISHED)
    ctx = context_for(db_session, specialist)

    all_mine = list_posts(db_session, ctx, PostQuery(locale="ka", scope=PostScope.SPECIALIST))
    published = list_posts(
        db_session, ctx, PostQuery(locale="ka", scope=PostScope.SPECIALIST, status=PostStatus.PUBLISHED)
    )

    assert _slugs(all_mine) == {"mine-draft", "mine-published"}
    assert _slugs(published) == {"mine-published"}


def test_public_scope_requires_published_and_locale(db_session):
    en_post = _post(db_session, "ka-with-en", status=PostStatus.PUBLISHED)
    db_session.add(PostTranslation(post_id=en_post.id, locale="en", title="English title", slug="english-title"))
    db_session.commit()
    _post(db_session, "ka-only", status=PostStatus.PUBLISHED)
    _post(db_session, "native-en", status=PostStatus.PUBLISHED, locale="en")
    _post(db_session, "draft-en", locale="en")

    page = list_posts(db_session, ANONYMOUS, PostQuery(locale="en"))

    assert _slugs(page) == {"english-title", "native-en"}
    translated = next(item for item in page.items if item["id"] == en_post.id)
    assert translated["title"] == "English title"
    assert translated["source_locale"] == "ka"
    assert translated["is_translated"] is True


def test_search_matches_base_and_translation_text(db_session):
    base_hit = _post(db_session, "base-hit", status=PostStatus.PUBLISHED, locale="en", body="Corporate tax reform")
    translated_hit = _post(db_session, "translated-hit", status=PostStatus.PUBLISHED)
    db_session.add(
        PostTranslation(post_id=translated_hit.id, locale="en", slug="translated-hit-en", body="New tax rules")
    )
    db_session.commit()
    _post(db_session, "miss", status=PostStatus.PUBLISHED, locale="en", body="Family law")

    page = list_posts(db_session, ANONYMOUS, PostQuery(locale="en", search="tax"))

    assert {item["id"] for item in page.items} == {base_hit.id, translated_hit.id}


def test_category_filter_accepts_base_or_translated_slug(db_session):
    category = make_category(db_session, "news")
    tagged = _post(db_session, "tagged", status=PostStatus.PUBLISHED)
    _post(db_session, "untagged", status=PostStatus.PUBLISHED)
    db_session.add(PostCategory(post_id=tagged.id, category_id=category.id))
    db_session.commit()

    page = list_posts(db_session, ANONYMOUS, PostQuery(locale="ka", category="news"))

    assert _slugs(page) == {"tagged"}


def test_cursor_pagination_walks_every_post_once(db_session):
    for index in range(5):
        _post(db_session, f"post-{index}", status=PostStatus.PUBLISHED)

    seen: list[str] = []
    cursor = None
    pages = 0
    while True:
        page = list_posts(db_session, ANONYMOUS, PostQuery(locale="ka", cursor=cursor, limit=2))
        pages += 1
        seen.extend(item["slug"] for item in page.items)
        if not page.has_more:
            break
        cursor = page.next_cursor

    assert pages == 3
    assert sorted(seen) == [f"post-{index}" for index in range(5)]


def test_company_filter_lists_only_that_companys_published_posts(db_session):
    firm_a = make_company(db_session, "firm-a")
    firm_b = make_company(db_session, "firm-b")
    db_session.add(CompanyTranslation(company_id=firm_a.id, locale="en", name="Firm A", slug="firm-a-en"))
    db_session.commit()
    _post(db_session, "a-published", company=firm_a, status=PostStatus.PUBLISHED, locale="en")
    _post(db_session, "a-draft", company=firm_a, locale="en")
    _post(db_session, "a-other-locale", company=firm_a, status=PostStatus.PUBLISHED, locale="ru")
    _post(db_session, "b-published", company=firm_b, status=PostStatus.PUBLISHED, locale="en")

    by_base_slug = list_posts(db_session, ANONYMOUS, PostQuery(locale="en", company="firm-a"))
    by_translated_slug = list_posts(db_session, ANONYMOUS, PostQuery(locale="en", company="firm-a-en"))
    unknown = list_posts(db_session, ANONYMOUS, PostQuery(locale="en", company="firm-z"))

    assert _slugs(by_base_slug) == {"a-published"}
    assert _slugs(by_translated_slug) == {"a-published"}
    assert unknown.items == []


def test_author_filter_follows_specialist_contact_email(db_session):
    profile = make_specialist_profile(db_session, "nino", contact_email="nino@example.test")
    db_session.add(
        SpecialistProfileTranslation(specialist_profile_id=profile.id, locale="en", name="Nino", slug="nino-en")
    )
    db_session.commit()
    nino = make_user(db_session, UserRole.SPECIALIST, email="nino@example.test")
    other = make_user(db_session, UserRole.SPECIALIST, email="other@example.test")
    _post(db_session, "nino-published", author=nino, status=PostStatus.PUBLISHED, locale="en")
    _post(db_session, "nino-draft", author=nino, locale="en")
    _post(db_session, "other-published", author=other, status=PostStatus.PUBLISHED, locale="en")

    by_base_slug = list_posts(db_session, ANONYMOUS, PostQuery(locale="en", author="nino"))
    by_translated_slug = list_posts(db_session, ANONYMOUS, PostQuery(locale="en", author="nino-en"))

    assert _slugs(by_base_slug) == {"nino-published"}
    assert _slugs(by_translated_slug) == {"nino-published"}


def test_author_filter_ignores_profile_without_contact_email(db_session):
    make_specialist_profile(db_session, "no-email")
    author = make_user(db_session, UserRole.SPECIALIST)
    _post(db_session, "someone", author=author, status=PostStatus.PUBLISHED)

    page = list_posts(db_session, ANONYMOUS, PostQuery(locale="ka", author="no-email"))

    assert page.items == []
