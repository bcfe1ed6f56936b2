# profile_studio/views.py
"""
Presentation helpers shared by the Streamlit views.
Everything here reads canonical records only and returns plain strings.
"""

from typing import List, Tuple

from profile_studio.schemas import (
    ApplicationState,
    EducationEntry,
    ExperienceEntry,
    ProfileRecord,
    Section,
    Status,
    View,
)

# (view, icon, label) for the navigation overlay
NAV_ITEMS: List[Tuple[View, str, str]] = [
    (View.PROFILE_VIEW, ":material/person:", "Profile Overview"),
    (View.AI_OPTIMIZER, ":material/auto_awesome:", "AI Enhancer"),
    (View.POST_GENERATOR, ":material/chat:", "Post Generator"),
]

REGEN_PRESETS = {
    Section.HEADLINE: "make it more punchy",
    Section.ABOUT: "more professional",
    Section.EXPERIENCE_BULLETS: "more quantified",
}


def date_range(entry: ExperienceEntry) -> str:
    span = f"{entry.start_date} — {entry.end_date}".strip(" —")
    if entry.duration:
        span = f"{span} ({entry.duration})" if span else f"({entry.duration})"
    return span


def education_line(entry: EducationEntry) -> str:
    if entry.degree and entry.field_of_study:
        return f"{entry.degree} • {entry.field_of_study}"
    return entry.degree or entry.field_of_study


def profile_badges(record: ProfileRecord) -> List[str]:
    badges = []
    if record.verified:
        badges.append("Verified")
    if record.premium:
        badges.append("Premium")
    if record.influencer:
        badges.append("Influencer")
    if record.open_to_work:
        badges.append("Open to work")
    if record.hiring:
        badges.append("Hiring")
    return badges


def analyze_button_label(state: ApplicationState) -> str:
    return "Analyzing..." if state.status is Status.SCRAPING else "Analyze Profile"


def enhance_button_label(state: ApplicationState) -> str:
    return "Processing..." if state.status is Status.ANALYZING else "Enhance Your Profile with AI"


def status_label(state: ApplicationState) -> str:
    if state.status in (Status.SCRAPING, Status.ANALYZING):
        return state.message
    if state.status is Status.ERROR:
        return state.message or "Something went wrong."
    return ""


def profile_link(record: ProfileRecord) -> str:
    if record.linkedin_url:
        return record.linkedin_url
    if record.public_identifier:
        return f"https://www.linkedin.com/in/{record.public_identifier}"
    return ""
