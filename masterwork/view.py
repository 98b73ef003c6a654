# masterwork/view.py
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple

from .balance import DEFAULT_BALANCE, BalanceTable
from .markup import extract_description
from .models import ParsedDescription, RawItem
from .upgrade import adjust_stats


@dataclass(frozen=True)
class ItemView:
    """An item next to its parsed description and its masterwork stat lines."""
    item: RawItem
    description: ParsedDescription
    masterwork_stats: Tuple[str, ...]

    @property
    def name(self) -> str:
        return self.item.name


def build_item_view(item: RawItem, balance: BalanceTable = DEFAULT_BALANCE) -> ItemView:
    description = extract_description(item.description)
    return ItemView(
        item=item,
        description=description,
        masterwork_stats=tuple(adjust_stats(list(description.stats), balance)),
    )


def build_item_views(
    items: Mapping[str, RawItem], balance: BalanceTable = DEFAULT_BALANCE
) -> List[ItemView]:
    return [build_item_view(item, balance) for item in items.values()]


def search_views(views: Iterable[ItemView], query: str | None) -> List[ItemView]:
    q = (query or "").strip().lower()
    if not q:
        return list(views)
    return [v for v in views if q in v.name.lower()]
