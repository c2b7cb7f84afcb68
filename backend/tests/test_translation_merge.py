from types import SimpleNamespace

import pytest

from legalhub.application.services.translation_merge_service import (
    POST_MERGE_SPEC,
    SPECIALIST_MERGE_SPEC,
    merge_composite,
    merge_fields,
    merge_text,
)


def _specialist_base(**overrides) -> SimpleNamespace:
    values = {
        "id": "profile-1",
        "name": "ნინო ბერიძე",
        "slug": "ნინო-ბერიძე",
        "role": "პარტნიორი",
        "bio": "ბიოგრაფია",
        "philosophy": None,
        "meta_title": None,
        "meta_description": None,
        "specializations": ["საგადასახადო სამართალი"],
        "focus_areas": {"tax": "დავები"},
        "representative_matters": ["საქმე 1"],
        "teaching_writing": None,
        "credentials": {"education": ["TSU"]},
        "values": [],
        "languages": ["ka", "en"],
        "contact_email": "nino@example.test",
        "contact_phone": None,
        "city": "Tbilisi",
        "avatar_url": None,
        "company_id": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_mixed_translation_resolves_each_field_independently():
    base = _specialist_base()
    translation = SimpleNamespace(
        name="Nino Beridze",
        slug="   ",
        role="",
        bio=None,
        philosophy="Clients first",
        meta_title=None,
        meta_description=None,
        specializations=["Tax law", "M&A"],
        focus_areas={},
        representative_matters=None,
        teaching_writing=["Lecturer"],
        credentials={"education": ["LSE"]},
        values=None,
    )

    merged = merge_fields(base, translation, SPECIALIST_MERGE_SPEC, locale="en")

    assert merged["name"] == "Nino Beridze"
    assert merged["slug"] == "ნინო-ბერიძე"
    assert merged["role"] == "პარტნიორი"
    assert merged["bio"] == "ბიოგრაფია"
    assert merged["philosophy"] == "Clients first"
    assert merged["specializations"] == ["Tax law", "M&A"]
    assert merged["focus_areas"] == {"tax": "დავები"}
    assert merged["representative_matters"] == ["საქმე 1"]
    assert merged["teaching_writing"] == ["Lecturer"]
    assert merged["credentials"] == {"education": ["LSE"]}
    assert merged["values"] == []
    assert merged["languages"] == ["ka", "en"]
    assert merged["locale"] == "en"
    assert merged["is_translated"] is True


def test_composite_fields_are_never_deep_merged():
    base = _specialist_base(credentials={"education": ["TSU"], "bar": ["GBA"]})
    translation = SimpleNamespace(credentials={"education": ["LSE"]})

    merged = merge_fields(base, translation, SPECIALIST_MERGE_SPEC, locale="en")

    assert merged["credentials"] == {"education": ["LSE"]}
    assert "bar" not in merged["credentials"]


def test_missing_translation_yields_base_values():
    post = SimpleNamespace(
        id="post-1",
        title="საგადასახადო ცვლილებები",
        slug="საგადასახადო-ცვლილებები",
        excerpt=None,
        body="<p>ტექსტი</p>",
        meta_title=None,
        meta_description=None,
        cover_image_alt=None,
        status="PUBLISHED",
        author_type="COMPANY",
        author_id=None,
        company_id=None,
        cover_image=None,
        published_at=None,
        reading_time=1,
        created_at=None,
        updated_at=None,
    )

    merged = merge_fields(post, None, POST_MERGE_SPEC, locale="ka")

    assert merged["title"] == post.title
    assert merged["slug"] == post.slug
    assert merged["body"] == post.body
    assert merged["is_translated"] is False


def test_merge_does_not_modify_inputs():
    base = _specialist_base()
    translation = SimpleNamespace(name="Nino", specializations=["Tax"])

    merge_fields(base, translation, SPECIALIST_MERGE_SPEC, locale="en")

    assert base.name == "ნინო ბერიძე"
    assert base.specializations == ["საგადასახადო სამართალი"]
    assert translation.name == "Nino"


@pytest.mark.parametrize(
    ("base_value", "translated", "expected"),
    [
        ("Base", "Translated", "Translated"),
        ("Base", "  Translated  ", "  Translated  "),
        ("Base", "   ", "Base"),
        ("Base", "", "Base"),
        ("Base", None, "Base"),
        (None, None, None),
    ],
)
def test_merge_text(base_value, translated, expected):
    assert merge_text(base_value, translated) == expected


@pytest.mark.parametrize(
    ("base_value", "translated", "expected"),
    [
        (["a"], ["b"], ["b"]),
        (["a"], [], ["a"]),
        ({"k": "v"}, {}, {"k": "v"}),
        ({"k": "v"}, None, {"k": "v"}),
        (None, {"k": ["v"]}, {"k": ["v"]}),
    ],
)
def test_merge_composite(base_value, translated, expected):
    assert merge_composite(base_value, translated) == expected
