# masterwork/export.py
import datetime
import json
import os
from typing import Any, Dict, List

import pytz

from .logger import get_logger
from .view import ItemView

logger = get_logger(__name__)


def now_utc_iso() -> str:
    return datetime.datetime.now(tz=pytz.UTC).isoformat()


def view_to_dict(view: ItemView) -> Dict[str, Any]:
    item = view.item
    return {
        "id": item.item_id,
        "name": item.name,
        "plaintext": item.plaintext,
        "image": item.image_url,
        "description": view.description.to_dict(),
        "masterwork_stats": list(view.masterwork_stats),
    }


def build_snapshot(version: str, views: List[ItemView]) -> Dict[str, Any]:
    return {
        "version": version,
        "generated_at": now_utc_iso(),
        "items": {view.item.item_id: view_to_dict(view) for view in views},
    }


def write_snapshot(path: str, version: str, views: List[ItemView]) -> None:
    """
    Write the parsed catalog as JSON for a downstream presenter.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(build_snapshot(version, views), f, ensure_ascii=False, indent=2)
    logger.info("Wrote %d items to %s", len(views), path)
