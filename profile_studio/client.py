# profile_studio/client.py
"""
HTTP client the Streamlit frontend uses to reach the backend.
Blocking requests run in a worker thread so callers can await them.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from profile_studio import config
from profile_studio.schemas import ChatTurn, OptimizedContent, ProfileRecord, Section

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """Backend call failed; the message is the backend's error detail."""


class BackendClient:
    def __init__(self, api_base: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.api_base = (api_base or config.API_BASE).rstrip("/")
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = self.session.post(f"{self.api_base}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Backend unreachable at %s: %s", self.api_base, e)
            raise BackendError(f"Could not reach the backend: {e}") from e

        if resp.status_code != 200:
            raise BackendError(self._error_detail(resp))
        return resp.json()

    @staticmethod
    def _error_detail(resp: requests.Response) -> str:
        try:
            detail = resp.json().get("detail")
        except ValueError:
            detail = None
        if isinstance(detail, str) and detail:
            return detail
        return f"Backend error {resp.status_code}: {resp.text[:200]}"

    def health(self) -> Dict[str, Any]:
        try:
            resp = self.session.get(f"{self.api_base}/health", timeout=self.timeout)
        except requests.RequestException as e:
            raise BackendError(f"Could not reach the backend: {e}") from e
        if resp.status_code != 200:
            raise BackendError(self._error_detail(resp))
        return resp.json()

    async def _call(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self._post, path, payload)

    async def scrape_profile(self, url: str) -> ProfileRecord:
        data = await self._call("/scrape", {"url": url})
        return ProfileRecord.model_validate(data)

    async def optimize_profile(self, profile: ProfileRecord) -> OptimizedContent:
        data = await self._call("/optimize", {"profile": profile.model_dump(mode="json")})
        return OptimizedContent.model_validate(data)

    async def regenerate_section(self, section: Section, feedback: str, profile: ProfileRecord) -> str:
        data = await self._call("/regenerate", {
            "section": Section(section).value,
            "feedback": feedback,
            "profile": profile.model_dump(mode="json"),
        })
        return data.get("text", "")

    async def generate_post(self, message: str, history: List[ChatTurn]) -> str:
        data = await self._call("/generate-post", {
            "message": message,
            "history": [turn.model_dump() for turn in history],
        })
        return data.get("message", "")
