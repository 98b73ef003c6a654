# masterwork/catalog.py
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Set, Tuple

from .logger import get_logger
from .models import RawItem

logger = get_logger(__name__)

BASE_ID_LENGTH = 4


@dataclass(frozen=True)
class CatalogFilter:
    """
    Which catalog entries make it into the viewer.

    Entries at one of `depths` are accepted; entries at one of
    `leaf_depths` only when they build into nothing.
    """
    map_id: str = "11"  # Summoner's Rift
    require_purchasable: bool = True
    excluded_tags: Tuple[str, ...] = ("Boots",)
    depths: Tuple[int, ...] = (3,)
    leaf_depths: Tuple[int, ...] = (2,)
    drop_variant_ids: bool = True

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "CatalogFilter":
        if not isinstance(cfg, Mapping):
            raise ValueError("'catalog' must be an object.")
        defaults = cls()
        try:
            return cls(
                map_id=str(cfg.get("map_id", defaults.map_id)),
                require_purchasable=bool(cfg.get("require_purchasable", defaults.require_purchasable)),
                excluded_tags=_str_tuple(cfg.get("excluded_tags", defaults.excluded_tags)),
                depths=_int_tuple(cfg.get("depths", defaults.depths)),
                leaf_depths=_int_tuple(cfg.get("leaf_depths", defaults.leaf_depths)),
                drop_variant_ids=bool(cfg.get("drop_variant_ids", defaults.drop_variant_ids)),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid 'catalog' section: {e}")


def _str_tuple(value: Iterable[Any]) -> Tuple[str, ...]:
    if isinstance(value, str):
        raise TypeError("expected a list of strings")
    return tuple(str(v) for v in value)


def _int_tuple(value: Iterable[Any]) -> Tuple[int, ...]:
    if isinstance(value, str):
        raise TypeError("expected a list of integers")
    return tuple(int(v) for v in value)


DEFAULT_FILTER = CatalogFilter()


def base_ids(data: Mapping[str, Any]) -> Set[str]:
    return {item_id for item_id in data if len(item_id) == BASE_ID_LENGTH}


def is_variant_id(item_id: str, bases: Set[str]) -> bool:
    """Mode/map copies reuse a base id as their last four characters (e.g. 223031 -> 3031)."""
    return len(item_id) > BASE_ID_LENGTH and item_id[-BASE_ID_LENGTH:] in bases


def accepts(entry: Mapping[str, Any], criteria: CatalogFilter = DEFAULT_FILTER) -> bool:
    maps = entry.get("maps") or {}
    if not maps.get(criteria.map_id):
        return False

    gold = entry.get("gold") or {}
    if criteria.require_purchasable and not gold.get("purchasable"):
        return False

    tags = entry.get("tags") or ()
    if any(tag in tags for tag in criteria.excluded_tags):
        return False

    depth = entry.get("depth")
    if depth in criteria.depths:
        return True
    return depth in criteria.leaf_depths and "into" not in entry


def select_items(
    data: Mapping[str, Any],
    criteria: CatalogFilter = DEFAULT_FILTER,
    image_base: str = "",
) -> Dict[str, RawItem]:
    """
    Turn the catalog's `data` object into RawItems, keeping catalog order.
    `image_base` is prefixed to "<id>.png" for each item's icon.
    """
    bases = base_ids(data) if criteria.drop_variant_ids else set()
    out: Dict[str, RawItem] = {}
    skipped_variants = 0

    for item_id, entry in data.items():
        if not isinstance(entry, Mapping):
            logger.warning("Catalog entry %s is not an object; skipping.", item_id)
            continue
        if is_variant_id(item_id, bases):
            skipped_variants += 1
            continue
        if not accepts(entry, criteria):
            continue

        image_url = f"{image_base}{item_id}.png" if image_base else ""
        out[item_id] = RawItem.from_catalog(item_id, entry, image_url=image_url)

    logger.debug(
        "Catalog filter kept %d of %d entries (%d variant ids dropped).",
        len(out), len(data), skipped_variants,
    )
    return out
