from itertools import zip_longest
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from masterwork.view import ItemView

# Resolve template directory relative to this file
TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def _stat_rows(view: ItemView) -> List[dict]:
    return [
        {"original": original or "", "masterwork": upgraded or ""}
        for original, upgraded in zip_longest(view.description.stats, view.masterwork_stats)
    ]


def build_plaintext_report(version: str, views: List[ItemView]) -> str:
    template = env.get_template("items.txt")

    items_data = []
    for view in views:
        desc = view.description
        items_data.append(
            {
                "name": view.name,
                "item_id": view.item.item_id,
                "plaintext": view.item.plaintext,
                "passives": [
                    {"name": name, "description": ability.description}
                    for name, ability in desc.passives.items()
                ],
                "active": desc.active,
                "stat_rows": _stat_rows(view),
                "width": max((len(s) for s in desc.stats), default=0),
            }
        )

    ctx = {
        "version": version,
        "item_count": len(views),
        "items": items_data,
    }
    return template.render(**ctx)
