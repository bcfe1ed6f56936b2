# profile_studio/scraper.py
"""
Apify-based LinkedIn scraper.
One actor run per profile URL; the first dataset item is returned untouched
and normalization happens at the caller's boundary.
"""

import logging
from typing import Any, Dict, Optional

from apify_client import ApifyClientAsync

from profile_studio import config

logger = logging.getLogger(__name__)

PROFILE_PATH_MARKER = "linkedin.com/in/"


class ScrapeError(RuntimeError):
    """Scraping failed; the message is safe to show to the user."""


def is_linkedin_profile_url(url: Optional[str]) -> bool:
    return bool(url) and PROFILE_PATH_MARKER in url


def _dataset_id(run: Any) -> Optional[str]:
    # apify-client 3 returns a Run model; older releases return the raw dict
    if not run:
        return None
    if isinstance(run, dict):
        return run.get("defaultDatasetId")
    return getattr(run, "default_dataset_id", None)


async def scrape_profile(url: str, client: Optional[ApifyClientAsync] = None) -> Dict[str, Any]:
    if client is None:
        if not config.APIFY_API_TOKEN:
            raise ScrapeError("APIFY_API_TOKEN not set. Cannot use Apify scraper.")
        client = ApifyClientAsync(config.APIFY_API_TOKEN)

    run_input = {
        "urls": [url],
        "proxyConfiguration": {"useApifyProxy": True}
    }

    logger.info("Starting Apify actor %s for URL: %s", config.APIFY_ACTOR_ID, url)

    try:
        run = await client.actor(config.APIFY_ACTOR_ID).call(run_input=run_input)
        dataset_id = _dataset_id(run)
        if not dataset_id:
            raise ScrapeError("Apify actor run did not produce a dataset.")

        dataset_items = await client.dataset(dataset_id).list_items()
    except ScrapeError:
        raise
    except Exception as e:
        logger.exception("Apify call failed")
        raise ScrapeError(f"Failed to scrape LinkedIn profile: {e}") from e

    if not dataset_items or not dataset_items.items:
        raise ScrapeError("No data returned by Apify actor. Check the profile URL or your Apify credits.")

    scraped_data = dataset_items.items[0]
    if not isinstance(scraped_data, dict):
        raise ScrapeError("Apify actor returned an unexpected record shape.")

    logger.info("Scraped profile with %d fields", len(scraped_data))
    return scraped_data
