# profile_studio/normalizer.py
"""
Display-safe coercion of scraped LinkedIn payloads.

Scraper providers disagree on field names and types (fullName vs first/last
name, images as strings or {"url": ...} objects, singular vs plural list keys,
lists that arrive as a single string). Everything here is total: bad input
degrades to "" or [] and nothing raises.
"""

from typing import Any, Dict, Iterable, List, Mapping

from profile_studio import config
from profile_studio.schemas import EducationEntry, ExperienceEntry, FeaturedItem, ProfileRecord

TEXT_KEYS = ("text", "linkedinText", "name", "label")
PROFILE_IMAGE_KEYS = ("profilePicture", "photo", "displayImage", "profilePicUrl", "imgUrl")


def render_text(value: Any) -> str:
    """Reduce a scalar or a text-bearing object to a plain string."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping):
        for key in TEXT_KEYS:
            candidate = value.get(key)
            if candidate:
                return render_text(candidate)
    return ""


def resolve_image(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        url = value.get("url")
        if isinstance(url, str):
            return url
    return ""


def resolve_profile_image(record: Any) -> str:
    if isinstance(record, Mapping):
        for key in PROFILE_IMAGE_KEYS:
            url = resolve_image(record.get(key))
            if url:
                return url
    return config.PLACEHOLDER_IMAGE


def coerce_to_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, str) and value.strip():
        return [value]
    return []


def _first(raw: Mapping, *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def _text_list(values: Iterable[Any]) -> List[str]:
    # Order-preserving, drops blanks and repeats
    seen = set()
    out = []
    for value in values:
        text = render_text(value).strip()
        if text and text not in seen:
            seen.add(text)
            out.append(text)
    return out


def _full_name(raw: Mapping) -> str:
    full_name = render_text(raw.get("fullName")).strip()
    if full_name:
        return full_name
    parts = [render_text(raw.get("firstName")).strip(), render_text(raw.get("lastName")).strip()]
    return " ".join(p for p in parts if p)


def _experience_entry(item: Any) -> ExperienceEntry:
    if not isinstance(item, Mapping):
        return ExperienceEntry(title=render_text(item))
    return ExperienceEntry(
        title=render_text(_first(item, "position", "title")),
        company=render_text(_first(item, "companyName", "company")),
        start_date=render_text(item.get("startDate")),
        end_date=render_text(item.get("endDate")) or "Present",
        duration=render_text(item.get("duration")),
        location=render_text(item.get("location")),
        description=render_text(item.get("description")),
        logo=resolve_image(_first(item, "companyLogo", "logoUrl", "logo")),
    )


def _education_entry(item: Any) -> EducationEntry:
    if not isinstance(item, Mapping):
        return EducationEntry(school=render_text(item))
    return EducationEntry(
        school=render_text(_first(item, "schoolName", "school")),
        degree=render_text(_first(item, "degreeName", "degree")),
        field_of_study=render_text(item.get("fieldOfStudy")),
        start_date=render_text(item.get("startDate")),
        end_date=render_text(item.get("endDate")),
        logo=resolve_image(_first(item, "schoolLogo", "logoUrl", "logo", "companyLogo")),
    )


def _featured_item(item: Any) -> FeaturedItem:
    if not isinstance(item, Mapping):
        return FeaturedItem(title=render_text(item))
    return FeaturedItem(
        title=render_text(_first(item, "title", "description")),
        image=resolve_image(item.get("image")),
        url=render_text(item.get("url")),
    )


def normalize_profile(raw: Any) -> ProfileRecord:
    """
    Adapt one provider payload to the canonical ProfileRecord.

    An already-normalized ProfileRecord is returned as-is, so callers can
    normalize at every boundary without caring where the record came from.
    """
    if isinstance(raw, ProfileRecord):
        return raw
    if not isinstance(raw, Mapping):
        return ProfileRecord(profile_image=config.PLACEHOLDER_IMAGE)

    experience = coerce_to_list(_first(raw, "experience", "experiences"))
    education = coerce_to_list(raw.get("education"))
    skills = coerce_to_list(raw.get("topSkills")) + coerce_to_list(raw.get("skills"))

    return ProfileRecord(
        full_name=_full_name(raw),
        headline=render_text(raw.get("headline")),
        about=render_text(_first(raw, "about", "summary")),
        location=render_text(raw.get("location")),
        current_position=render_text(raw.get("currentPosition")),
        profile_image=resolve_profile_image(raw),
        cover_image=resolve_image(_first(raw, "coverPicture", "backgroundPicture")),
        follower_count=render_text(raw.get("followerCount")) or "0",
        connections_count=render_text(raw.get("connectionsCount")) or "0",
        verified=bool(raw.get("verified")),
        premium=bool(raw.get("premium")),
        influencer=bool(raw.get("influencer")),
        open_to_work=bool(raw.get("openToWork")),
        hiring=bool(raw.get("hiring")),
        linkedin_url=render_text(raw.get("linkedinUrl")),
        public_identifier=render_text(raw.get("publicIdentifier")),
        experience=[_experience_entry(item) for item in experience],
        education=[_education_entry(item) for item in education],
        skills=_text_list(skills),
        featured=[_featured_item(item) for item in coerce_to_list(raw.get("featured"))],
        certifications=_text_list(coerce_to_list(raw.get("certifications"))),
        languages=_text_list(coerce_to_list(raw.get("languages"))),
    )


def profile_summary(record: ProfileRecord) -> Dict[str, Any]:
    """Compact dict of the fields worth sending to the language model."""
    return {
        "name": record.full_name,
        "headline": record.headline,
        "about": record.about,
        "location": record.location,
        "current_position": record.current_position,
        "experience": [
            {
                "title": e.title,
                "company": e.company,
                "date": f"{e.start_date} - {e.end_date}".strip(" -"),
                "description": e.description,
            }
            for e in record.experience
        ],
        "education": [
            {"school": e.school, "degree": e.degree, "field": e.field_of_study}
            for e in record.education
        ],
        "skills": record.skills,
        "certifications": record.certifications,
        "languages": record.languages,
    }
