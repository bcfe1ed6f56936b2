# profile_studio/state.py
"""
Single source of truth for the UI.

ProfileSession owns the ApplicationState plus the post-generator transcript and
the navigation overlay flag. Every transition swaps in an updated copy of the
state. Transitions that await a collaborator stamp the request with a
generation token, and a resolution whose token is no longer current is
dropped. If two requests overlap, the newest one wins.

Failure visibility:
    scrape / full optimize   -> status=error, message=<reason>
    section regen / chat     -> logged, reported via `notice`; status and
                                optimized stay as they were, a failed chat
                                keeps the user turn but gets no AI reply
"""

import logging
from typing import Any, Dict, List, Optional

from profile_studio.normalizer import normalize_profile
from profile_studio.schemas import ApplicationState, ChatTurn, Section, Status, View
from profile_studio.scraper import is_linkedin_profile_url

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid LinkedIn URL"
SCRAPING_MESSAGE = "Fetching complete profile data..."
ANALYZING_MESSAGE = "Optimizing strategy..."


class ProfileSession:
    """
    Application shell state.

    `scraper` needs an async `scrape_profile(url)`. `optimizer` needs async
    `optimize_profile(profile)`, `regenerate_section(section, feedback, profile)`
    and `generate_post(message, history)`. BackendClient provides both.
    """

    def __init__(self, scraper: Any, optimizer: Any):
        self.scraper = scraper
        self.optimizer = optimizer
        self.state = ApplicationState()
        self.chat_history: List[ChatTurn] = []
        self.chat_input = ""
        self.nav_open = False
        self.notice = ""
        self._generations: Dict[str, int] = {}

    # -- helpers --------------------------------------------------------

    def _apply(self, **changes) -> None:
        self.state = self.state.model_copy(update=changes)

    def _begin(self, kind: str) -> int:
        token = self._generations.get(kind, 0) + 1
        self._generations[kind] = token
        return token

    def _is_current(self, kind: str, token: int) -> bool:
        if self._generations.get(kind) != token:
            logger.info("Discarding stale %s result (token %d)", kind, token)
            return False
        return True

    # -- transitions ----------------------------------------------------

    async def submit(self, url: str) -> None:
        url = (url or "").strip()
        if not is_linkedin_profile_url(url):
            self._apply(status=Status.ERROR, message=INVALID_URL_MESSAGE)
            return

        token = self._begin("scrape")
        self._apply(status=Status.SCRAPING, message=SCRAPING_MESSAGE)
        try:
            raw = await self.scraper.scrape_profile(url)
        except Exception as e:
            logger.warning("Scrape failed for %s: %s", url, e)
            if self._is_current("scrape", token):
                self._apply(status=Status.ERROR, message=str(e))
            return

        if self._is_current("scrape", token):
            self._apply(status=Status.SUCCESS, message="", view=View.PROFILE_VIEW, data=normalize_profile(raw))

    async def enhance(self) -> None:
        profile = self.state.data
        if profile is None:
            return

        token = self._begin("optimize")
        self._apply(status=Status.ANALYZING, message=ANALYZING_MESSAGE)
        try:
            optimized = await self.optimizer.optimize_profile(profile)
        except Exception as e:
            logger.warning("Profile optimization failed: %s", e)
            if self._is_current("optimize", token):
                self._apply(status=Status.ERROR, message=str(e))
            return

        if self._is_current("optimize", token):
            self._apply(status=Status.SUCCESS, message="", view=View.AI_OPTIMIZER, optimized=optimized)

    async def regenerate_section(self, section: Section, feedback: str) -> None:
        if self.state.optimized is None or self.state.data is None:
            return

        section = Section(section)
        kind = f"regenerate:{section.value}"
        token = self._begin(kind)
        try:
            text = await self.optimizer.regenerate_section(section, feedback, self.state.data)
        except Exception as e:
            logger.error("Regenerating %s failed: %s", section.value, e)
            if self._is_current(kind, token):
                self.notice = f"Could not regenerate {section.value}: {e}"
            return

        # optimized may have been replaced while we waited; patch whatever is current
        if not self._is_current(kind, token) or self.state.optimized is None:
            return
        value = [text] if section is Section.EXPERIENCE_BULLETS else text
        optimized = self.state.optimized.model_copy(update={section.field_name: value})
        self._apply(optimized=optimized)

    async def send_chat_message(self, text: Optional[str] = None) -> None:
        message = self.chat_input if text is None else text
        if not message or not message.strip():
            return

        prior = list(self.chat_history)
        self.chat_history = prior + [ChatTurn(role="user", text=message)]
        self.chat_input = ""
        try:
            reply = await self.optimizer.generate_post(message, prior)
        except Exception as e:
            logger.error("Post generation failed: %s", e)
            self.notice = f"Could not generate a post: {e}"
            return

        self.chat_history = self.chat_history + [ChatTurn(role="ai", text=reply)]

    def navigate(self, view: View) -> None:
        self._apply(view=View(view))
        self.nav_open = False

    def open_navigation(self) -> None:
        self.nav_open = True

    def close_navigation(self) -> None:
        self.nav_open = False

    def return_to_onboarding(self) -> None:
        # data/optimized survive; the next successful scrape replaces data
        self._apply(view=View.ONBOARDING, status=Status.IDLE)

    def dismiss_notice(self) -> None:
        self.notice = ""
