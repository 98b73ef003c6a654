# fetchers/ddragon.py
import json
import os
from typing import Any, Dict, List, Tuple

import requests
from tenacity import retry, wait_exponential_jitter, stop_after_attempt, RetryError

from masterwork.catalog import DEFAULT_FILTER, CatalogFilter, select_items
from masterwork.logger import get_logger
from masterwork.models import RawItem

logger = get_logger(__name__)

BASE_URL = "https://ddragon.leagueoflegends.com"
VERSIONS_URL = f"{BASE_URL}/api/versions.json"

USER_AGENT = os.getenv(
    "DDRAGON_USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
)
PROXY_URL = os.getenv("DDRAGON_PROXY_URL", "").strip()
FETCH_ATTEMPTS = int(os.getenv("DDRAGON_FETCH_ATTEMPTS", "5"))

SESSION = requests.Session()
SESSION.headers.update({"User-Agent": USER_AGENT})
if PROXY_URL:
    SESSION.proxies.update({"http": PROXY_URL, "https": PROXY_URL})


class CatalogError(Exception):
    """The item catalog could not be fetched or understood."""


def item_data_url(version: str, locale: str = "en_US") -> str:
    return f"{BASE_URL}/cdn/{version}/data/{locale}/item.json"


def image_base_url(version: str) -> str:
    return f"{BASE_URL}/cdn/{version}/img/item/"


@retry(wait=wait_exponential_jitter(initial=1, max=30), stop=stop_after_attempt(FETCH_ATTEMPTS))
def _fetch(url: str) -> str:
    r = SESSION.get(url, timeout=30)
    r.raise_for_status()
    return r.text


def _fetch_json(url: str) -> Any:
    try:
        text = _fetch(url)
    except RetryError as e:
        logger.error("Data Dragon fetch failed for %s after retries: %s", url, e)
        raise CatalogError(f"Failed to fetch {url}") from e

    try:
        return json.loads(text)
    except ValueError as e:
        logger.error("Data Dragon returned invalid JSON at %s: %s", url, e)
        raise CatalogError(f"Invalid JSON from {url}") from e


def fetch_versions() -> List[str]:
    """Published patch versions, newest first."""
    versions = _fetch_json(VERSIONS_URL)
    if not isinstance(versions, list) or not versions:
        raise CatalogError("Data Dragon versions list is empty or malformed")
    return [str(v) for v in versions]


def resolve_version(version: str | None) -> str:
    version = (version or "").strip()
    if version and version.lower() != "latest":
        return version
    latest = fetch_versions()[0]
    logger.info("Resolved latest Data Dragon version: %s", latest)
    return latest


def fetch_catalog(
    version: str | None = "latest",
    criteria: CatalogFilter = DEFAULT_FILTER,
    locale: str = "en_US",
) -> Tuple[str, Dict[str, RawItem]]:
    """
    Download item.json for a patch and return (version, items) with the
    catalog filter applied. Raises CatalogError rather than returning a
    partial catalog.
    """
    version = resolve_version(version)
    url = item_data_url(version, locale)
    logger.info("Fetching item catalog %s (%s) at %s", version, locale, url)

    payload = _fetch_json(url)
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        logger.error("Item catalog at %s has no 'data' object.", url)
        raise CatalogError(f"No item data in {url}")

    items = select_items(data, criteria, image_base=image_base_url(version))
    logger.info("Catalog %s: %d items after filtering (%d in source).", version, len(items), len(data))
    return version, items
