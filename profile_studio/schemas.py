# profile_studio/schemas.py

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExperienceEntry(BaseModel):
    title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = "Present"
    duration: str = ""
    location: str = ""
    description: str = ""
    logo: str = ""


class EducationEntry(BaseModel):
    school: str = ""
    degree: str = ""
    field_of_study: str = ""
    start_date: str = ""
    end_date: str = ""
    logo: str = ""


class FeaturedItem(BaseModel):
    title: str = ""
    image: str = ""
    url: str = ""


class ProfileRecord(BaseModel):
    """Canonical profile shape. Built once from a provider payload by
    normalizer.normalize_profile; nothing downstream reads raw provider keys."""

    full_name: str = ""
    headline: str = ""
    about: str = ""
    location: str = ""
    current_position: str = ""
    profile_image: str = ""
    cover_image: str = ""
    follower_count: str = "0"
    connections_count: str = "0"
    verified: bool = False
    premium: bool = False
    influencer: bool = False
    open_to_work: bool = False
    hiring: bool = False
    linkedin_url: str = ""
    public_identifier: str = ""
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    featured: List[FeaturedItem] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.full_name or "User"


class Section(str, Enum):
    HEADLINE = "headline"
    ABOUT = "about"
    EXPERIENCE_BULLETS = "experienceBullets"

    @property
    def field_name(self) -> str:
        return {"experienceBullets": "experience_bullets"}.get(self.value, self.value)


class OptimizedContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    headline: str
    about: str
    experience_bullets: List[str] = Field(default_factory=list, alias="experienceBullets")


class ChatTurn(BaseModel):
    role: Literal["user", "ai"]
    text: str


class Status(str, Enum):
    IDLE = "idle"
    SCRAPING = "scraping"
    ANALYZING = "analyzing"
    SUCCESS = "success"
    ERROR = "error"


class View(str, Enum):
    ONBOARDING = "onboarding"
    PROFILE_VIEW = "profile-view"
    AI_OPTIMIZER = "ai-optimizer"
    POST_GENERATOR = "post-generator"
    SETTINGS = "settings"


class ApplicationState(BaseModel):
    status: Status = Status.IDLE
    message: str = ""
    view: View = View.ONBOARDING
    data: Optional[ProfileRecord] = None
    optimized: Optional[OptimizedContent] = None


# --- HTTP request/response bodies ---

class ScrapeRequest(BaseModel):
    url: str


class OptimizeRequest(BaseModel):
    profile: ProfileRecord


class RegenerateRequest(BaseModel):
    section: Section
    feedback: str = ""
    profile: ProfileRecord


class RegenerateResponse(BaseModel):
    section: Section
    text: str


class PostRequest(BaseModel):
    message: str
    history: List[ChatTurn] = Field(default_factory=list)


class PostResponse(BaseModel):
    message: str
