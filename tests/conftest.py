import asyncio
from types import SimpleNamespace

import pytest

from profile_studio.schemas import OptimizedContent

PROFILE_URL = "https://www.linkedin.com/in/jane-doe"

RAW_PROFILE = {
    "firstName": "Jane",
    "lastName": "Doe",
    "headline": "Data Engineer at Acme",
    "about": "I build pipelines.",
    "location": {"linkedinText": "London, United Kingdom"},
    "photo": {"url": "https://img.example/jane.png"},
    "followerCount": 1200,
    "experiences": [
        {
            "position": "Data Engineer",
            "companyName": "Acme",
            "startDate": {"text": "Jan 2021"},
            "companyLogo": {"url": "https://img.example/acme.png"},
        }
    ],
    "education": "University of Leeds",
    "topSkills": ["Python"],
    "skills": [{"name": "SQL"}, {"name": "Python"}],
}


class FakeScraper:
    def __init__(self, result=None, error=None):
        self.result = RAW_PROFILE if result is None else result
        self.error = error
        self.calls = []

    async def scrape_profile(self, url):
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.result


class FakeOptimizer:
    def __init__(self, optimized=None, section_text="Led X", post_reply="Here is your post",
                 optimize_error=None, section_error=None, post_error=None):
        self.optimized = optimized or OptimizedContent(
            headline="Senior Data Engineer | Pipelines at scale",
            about="I design data platforms.",
            experience_bullets=["Cut ETL runtime by 40%", "Migrated 200 jobs to Airflow"],
        )
        self.section_text = section_text
        self.post_reply = post_reply
        self.optimize_error = optimize_error
        self.section_error = section_error
        self.post_error = post_error
        self.optimize_calls = []
        self.section_calls = []
        self.post_calls = []

    async def optimize_profile(self, profile):
        self.optimize_calls.append(profile)
        if self.optimize_error:
            raise self.optimize_error
        return self.optimized

    async def regenerate_section(self, section, feedback, profile):
        self.section_calls.append((section, feedback, profile))
        if self.section_error:
            raise self.section_error
        return self.section_text

    async def generate_post(self, message, history):
        self.post_calls.append((message, list(history)))
        if self.post_error:
            raise self.post_error
        return self.post_reply


class GatedScraper:
    """Each call blocks until release(i) so tests can reorder resolutions."""

    def __init__(self, results):
        self.results = results
        self.gates = [asyncio.Event() for _ in results]
        self.calls = []

    async def scrape_profile(self, url):
        index = len(self.calls)
        self.calls.append(url)
        await self.gates[index].wait()
        return self.results[index]

    def release(self, index):
        self.gates[index].set()


class FakeCompletions:
    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        content = self.replies.pop(0) if self.replies else ""
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def fake_openai(replies=None, error=None):
    completions = FakeCompletions(replies, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture
def raw_profile():
    return dict(RAW_PROFILE)
