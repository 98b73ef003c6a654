import os
import json
from typing import Any, Dict, Tuple

from masterwork.logger import get_logger
from masterwork.balance import DEFAULT_BALANCE, BalanceTable
from masterwork.catalog import DEFAULT_FILTER, CatalogFilter
from masterwork.export import write_snapshot
from masterwork.report_text import build_plaintext_report
from masterwork.view import build_item_views, search_views
from fetchers import CatalogError, fetch_catalog

logger = get_logger(__name__)

VERSION = os.getenv("DDRAGON_VERSION", "latest").strip()
LOCALE = os.getenv("DDRAGON_LOCALE", "en_US").strip()
CONFIG_PATH = os.getenv("CONFIG_PATH", "").strip()
SEARCH_QUERY = os.getenv("SEARCH_QUERY", "")
SNAPSHOT_PATH = os.getenv("SNAPSHOT_PATH", "").strip()


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Read optional balance/catalog overrides. No path means built-in defaults."""
    if not path:
        return {}
    if not os.path.exists(path):
        logger.error("Config file not found at %s", path)
        raise SystemExit(1)
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg: Dict[str, Any] = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Failed to load config.json at %s: %s", path, e)
        raise SystemExit(1)

    if not isinstance(cfg, dict):
        logger.error("config.json must be an object.")
        raise SystemExit(1)

    return cfg


def settings_from_config(cfg: Dict[str, Any]) -> Tuple[BalanceTable, CatalogFilter]:
    try:
        balance = BalanceTable.from_config(cfg["balance"]) if "balance" in cfg else DEFAULT_BALANCE
        criteria = CatalogFilter.from_config(cfg["catalog"]) if "catalog" in cfg else DEFAULT_FILTER
    except ValueError as e:
        logger.error("Invalid config.json: %s", e)
        raise SystemExit(1)
    return balance, criteria


def run_once() -> int:
    balance, criteria = settings_from_config(load_config())

    try:
        version, items = fetch_catalog(VERSION, criteria, locale=LOCALE)
    except CatalogError as e:
        logger.error("Could not load the item catalog: %s", e)
        return 1

    views = search_views(build_item_views(items, balance), SEARCH_QUERY)
    if SEARCH_QUERY.strip():
        logger.info("Search '%s' matched %d of %d items.", SEARCH_QUERY.strip(), len(views), len(items))

    print(build_plaintext_report(version, views), end="")

    if SNAPSHOT_PATH:
        write_snapshot(SNAPSHOT_PATH, version, views)

    return 0


def main() -> None:
    try:
        raise SystemExit(run_once())
    except SystemExit:
        raise
    except Exception as e:
        logger.exception("Fatal viewer error: %s", e)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
