import asyncio

import pytest
import requests

from profile_studio.client import BackendClient, BackendError
from profile_studio.schemas import ChatTurn, ProfileRecord, Section


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self.payload = payload
        self.text = text

    def json(self):
        if self.payload is None:
            raise ValueError("no json")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json, timeout))
        if self.error:
            raise self.error
        return self.response

    def get(self, url, timeout=None):
        return self.post(url, timeout=timeout)


def make_client(response=None, error=None):
    session = FakeSession(response, error)
    return BackendClient("http://backend:8005/", timeout=5, session=session), session


def test_scrape_parses_profile_record():
    client, session = make_client(FakeResponse(payload={"full_name": "Jane Doe", "skills": ["SQL"]}))

    record = asyncio.run(client.scrape_profile("https://linkedin.com/in/jane"))

    assert isinstance(record, ProfileRecord)
    assert record.full_name == "Jane Doe"
    assert session.posts == [("http://backend:8005/scrape", {"url": "https://linkedin.com/in/jane"}, 5)]


def test_optimize_reads_aliased_bullets():
    client, session = make_client(FakeResponse(payload={"headline": "H", "about": "A", "experienceBullets": ["B"]}))

    result = asyncio.run(client.optimize_profile(ProfileRecord(full_name="Jane")))

    assert result.experience_bullets == ["B"]
    assert session.posts[0][1]["profile"]["full_name"] == "Jane"


def test_regenerate_and_post_payloads():
    client, session = make_client(FakeResponse(payload={"text": "Led X", "message": "Post"}))

    text = asyncio.run(client.regenerate_section(Section.EXPERIENCE_BULLETS, "shorter", ProfileRecord()))
    post = asyncio.run(client.generate_post("idea", [ChatTurn(role="ai", text="hi")]))

    assert (text, post) == ("Led X", "Post")
    assert session.posts[0][1]["section"] == "experienceBullets"
    assert session.posts[1][1]["history"] == [{"role": "ai", "text": "hi"}]


def test_error_detail_becomes_message():
    client, _ = make_client(FakeResponse(500, {"detail": "No data returned by Apify actor."}))

    with pytest.raises(BackendError, match="^No data returned by Apify actor.$"):
        asyncio.run(client.scrape_profile("https://linkedin.com/in/jane"))


def test_non_json_error_body():
    client, _ = make_client(FakeResponse(502, None, text="Bad Gateway"))

    with pytest.raises(BackendError, match="502"):
        asyncio.run(client.optimize_profile(ProfileRecord()))


def test_transport_failure():
    client, _ = make_client(error=requests.ConnectionError("refused"))

    with pytest.raises(BackendError, match="Could not reach the backend"):
        asyncio.run(client.generate_post("x", []))


def test_health():
    client, session = make_client(FakeResponse(payload={"status": "ok"}))
    assert client.health() == {"status": "ok"}
    assert session.posts[0][0] == "http://backend:8005/health"
