# profile_studio/optimizer.py
"""
AI rewriting for Profile Studio.
Full-profile optimization, single-section regeneration and freeform post
drafting, all through Groq's OpenAI-compatible chat-completions endpoint.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from profile_studio import config
from profile_studio.normalizer import coerce_to_list, profile_summary, render_text
from profile_studio.schemas import ChatTurn, OptimizedContent, ProfileRecord, Section

logger = logging.getLogger(__name__)

_client: Optional[AsyncOpenAI] = None

SECTION_GUIDES = {
    Section.HEADLINE: "a one-line LinkedIn headline (under 220 characters) packed with role keywords",
    Section.ABOUT: "an 80-120 word About summary in first person, active voice, quantified where possible",
    Section.EXPERIENCE_BULLETS: "a single experience bullet point that leads with an action verb and a measurable result",
}

POST_WRITER_PROMPT = (
    "You are a LinkedIn ghostwriter. Turn the user's idea into a ready-to-publish LinkedIn post: "
    "a strong hook in the first line, short paragraphs, a concrete takeaway and at most three hashtags. "
    "If the user asks for changes, revise your previous draft instead of starting over."
)


class OptimizationError(RuntimeError):
    """The language model call failed or returned something unusable."""


def _get_client() -> AsyncOpenAI:
    global _client
    if not config.GROQ_API_KEY:
        raise OptimizationError("GROQ_API_KEY not set. Cannot reach the AI service.")
    if _client is None:
        _client = AsyncOpenAI(api_key=config.GROQ_API_KEY, base_url=config.GROQ_BASE_URL)
    return _client


def _extract_structured_from_model(text: str) -> Dict[str, Any]:
    """
    Pull the outermost {...} span out of the model reply and parse it.
    Returns {} when there is nothing parseable.
    """
    try:
        start = text.index("{")
        end = text.rindex("}") + 1
        parsed = json.loads(text[start:end])
    except ValueError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


def _clean_reply(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        text = text[1:-1].strip()
    for marker in ("- ", "* ", "• "):
        if text.startswith(marker):
            text = text[len(marker):]
    return text.strip()


async def _complete(messages: List[Dict[str, str]], max_tokens: int, temperature: float,
                    client: Optional[AsyncOpenAI] = None) -> str:
    client = client or _get_client()
    try:
        response = await client.chat.completions.create(
            model=config.CHAT_MODEL,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            n=1
        )
    except Exception as e:
        logger.exception("Groq request failed")
        raise OptimizationError(f"Groq request failed: {e}") from e
    return (response.choices[0].message.content or "").strip()


async def optimize_profile(profile: ProfileRecord, client: Optional[AsyncOpenAI] = None) -> OptimizedContent:
    """Rewrite headline, about and experience bullets for the whole profile."""
    system_prompt = (
        "You are an expert career coach and LinkedIn profile optimizer. "
        "Given a user's LinkedIn profile as JSON, rewrite it to read like a high-converting landing page. "
        "Respond with a single JSON object and nothing after it, with keys:\n"
        "    - headline: one-line headline optimized for LinkedIn search keywords\n"
        "    - about: 80-120 word About summary, active voice, quantified achievements where possible\n"
        "    - experienceBullets: array of 3-6 rewritten bullet points covering the key achievements "
        "from the Experience section\n"
    )
    user_prompt = (
        "PROFILE_JSON:\n"
        f"{json.dumps(profile_summary(profile), ensure_ascii=False)}\n\n"
        "Be concise and specific. Do not invent employers or degrees."
    )

    analysis_text = await _complete(
        [{"role": "system", "content": system_prompt}, {"role": "user", "content": user_prompt}],
        max_tokens=config.ANALYZE_MAX_TOKENS,
        temperature=0.7,
        client=client,
    )

    parsed = _extract_structured_from_model(analysis_text)
    headline = render_text(parsed.get("headline")).strip()
    about = render_text(parsed.get("about")).strip()
    raw_bullets = parsed.get("experienceBullets", parsed.get("experience_bullets"))
    bullets = [b for b in (_clean_reply(render_text(x)) for x in coerce_to_list(raw_bullets)) if b]

    if not headline or not about:
        logger.warning("Unusable optimization reply: %.200s", analysis_text)
        raise OptimizationError("The AI response could not be parsed. Please try again.")

    return OptimizedContent(headline=headline, about=about, experience_bullets=bullets)


async def regenerate_section(section: Section, feedback: str, profile: ProfileRecord,
                             client: Optional[AsyncOpenAI] = None) -> str:
    """Produce replacement text for one optimized section, steered by feedback."""
    section = Section(section)
    system_prompt = (
        "You are an expert LinkedIn profile writer. "
        f"Write {SECTION_GUIDES[section]}. "
        "Reply with the text only: no preamble, no quotes, no markdown."
    )
    user_prompt = (
        "PROFILE_JSON:\n"
        f"{json.dumps(profile_summary(profile), ensure_ascii=False)}\n\n"
        f"FEEDBACK: {feedback.strip() or 'improve it'}\n"
    )

    text = await _complete(
        [{"role": "system", "content": system_prompt}, {"role": "user", "content": user_prompt}],
        max_tokens=config.SECTION_MAX_TOKENS,
        temperature=0.8,
        client=client,
    )
    text = _clean_reply(text)
    if not text:
        raise OptimizationError(f"The AI returned an empty {section.value}.")
    return text


async def generate_post(message: str, history: List[ChatTurn], client: Optional[AsyncOpenAI] = None) -> str:
    """Freeform post drafting; history is the transcript before this message."""
    messages = [{"role": "system", "content": POST_WRITER_PROMPT}]
    for turn in history:
        messages.append({"role": "user" if turn.role == "user" else "assistant", "content": turn.text})
    messages.append({"role": "user", "content": message})

    reply = await _complete(messages, max_tokens=config.CHAT_MAX_TOKENS, temperature=0.7, client=client)
    if not reply:
        raise OptimizationError("The AI returned an empty post.")
    return reply
