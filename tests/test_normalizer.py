import pytest

from profile_studio import config
from profile_studio.normalizer import (
    coerce_to_list,
    normalize_profile,
    profile_summary,
    render_text,
    resolve_image,
    resolve_profile_image,
)
from profile_studio.schemas import ProfileRecord


@pytest.mark.parametrize("value, expected", [
    (None, ""),
    ("plain", "plain"),
    (42, "42"),
    (3.5, "3.5"),
    ({"name": "X"}, "X"),
    ({"text": "T", "name": "N"}, "T"),
    ({"linkedinText": "Berlin"}, "Berlin"),
    ({"label": "L"}, "L"),
    ({}, ""),
    ({"text": ""}, ""),
    (["a", "b"], ""),
    (True, ""),
])
def test_render_text(value, expected):
    assert render_text(value) == expected


def test_render_text_never_returns_nested_object():
    assert render_text({"name": {"first": "A"}}) == ""
    assert render_text({"name": {"text": "A"}}) == "A"


@pytest.mark.parametrize("value, expected", [
    ("http://a/b.png", "http://a/b.png"),
    ({"url": "http://a/b.png"}, "http://a/b.png"),
    (None, ""),
    ("", ""),
    ({}, ""),
    ({"url": 7}, ""),
    (["http://a/b.png"], ""),
])
def test_resolve_image(value, expected):
    assert resolve_image(value) == expected


def test_resolve_profile_image_falls_back_to_placeholder():
    assert resolve_profile_image({}) == config.PLACEHOLDER_IMAGE
    assert resolve_profile_image(None) == config.PLACEHOLDER_IMAGE


def test_resolve_profile_image_key_order():
    assert resolve_profile_image({"photo": {"url": "X"}}) == "X"
    assert resolve_profile_image({"profilePicture": "", "photo": "P", "imgUrl": "I"}) == "P"
    assert resolve_profile_image({"profilePicture": {}, "imgUrl": "I"}) == "I"


def test_coerce_to_list():
    items = ["a", "b"]
    assert coerce_to_list("solo") == ["solo"]
    assert coerce_to_list([]) == []
    assert coerce_to_list(None) == []
    assert coerce_to_list(items) is items
    assert coerce_to_list("   ") == []
    assert coerce_to_list(5) == []
    assert coerce_to_list({"a": 1}) == []


def test_normalize_profile_adapts_provider_shape(raw_profile):
    record = normalize_profile(raw_profile)

    assert record.full_name == "Jane Doe"
    assert record.location == "London, United Kingdom"
    assert record.profile_image == "https://img.example/jane.png"
    assert record.follower_count == "1200"
    assert record.connections_count == "0"
    assert record.skills == ["Python", "SQL"]

    assert len(record.experience) == 1
    job = record.experience[0]
    assert job.title == "Data Engineer"
    assert job.company == "Acme"
    assert job.start_date == "Jan 2021"
    assert job.end_date == "Present"
    assert job.logo == "https://img.example/acme.png"

    assert [e.school for e in record.education] == ["University of Leeds"]


def test_normalize_profile_prefers_full_name_and_singular_experience():
    record = normalize_profile({
        "fullName": "Ada Lovelace",
        "firstName": "Ignored",
        "experience": [{"title": "Analyst", "company": "Engines Ltd", "endDate": "1843"}],
        "experiences": [{"title": "Never used"}],
        "summary": "Poet of science",
    })
    assert record.full_name == "Ada Lovelace"
    assert record.about == "Poet of science"
    assert record.experience[0].title == "Analyst"
    assert record.experience[0].end_date == "1843"


def test_normalize_profile_featured_and_cover():
    record = normalize_profile({
        "backgroundPicture": {"url": "https://img.example/cover.png"},
        "featured": [{"description": "Talk slides", "image": {"url": "https://img.example/s.png"}, "url": "https://x"}],
        "verified": 1,
    })
    assert record.cover_image == "https://img.example/cover.png"
    assert record.featured[0].title == "Talk slides"
    assert record.featured[0].image == "https://img.example/s.png"
    assert record.verified is True


def test_normalize_profile_is_total_on_garbage():
    assert normalize_profile(None) == ProfileRecord(profile_image=config.PLACEHOLDER_IMAGE)
    record = normalize_profile({"experience": 12, "skills": "Go", "education": {"schoolName": "X"}})
    assert record.experience == []
    assert record.skills == ["Go"]
    assert record.education == []


def test_normalize_profile_passes_canonical_record_through():
    record = ProfileRecord(full_name="Already Clean")
    assert normalize_profile(record) is record


def test_profile_summary_shape(raw_profile):
    summary = profile_summary(normalize_profile(raw_profile))
    assert summary["name"] == "Jane Doe"
    assert summary["experience"][0]["date"] == "Jan 2021 - Present"
    assert summary["skills"] == ["Python", "SQL"]


def test_profile_summary_carries_position_and_languages():
    record = ProfileRecord(full_name="Jane", current_position="Data Engineer at Acme", languages=["English", "German"])

    summary = profile_summary(record)

    assert summary["current_position"] == "Data Engineer at Acme"
    assert summary["languages"] == ["English", "German"]
