# masterwork/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


class InvalidInputError(TypeError):
    """Raised when the parser or reallocator is handed the wrong input type."""


@dataclass(frozen=True)
class RawItem:
    """
    One catalog entry as delivered by the item data source.
    `stats` is the catalog's raw stat-modifier mapping, kept verbatim;
    the readable stat lines live inside `description`.
    """
    item_id: str
    name: str
    plaintext: str = ""
    description: str = ""
    stats: Dict[str, float] = field(default_factory=dict)
    tags: Tuple[str, ...] = ()
    maps: Dict[str, bool] = field(default_factory=dict)
    gold: Dict[str, Any] = field(default_factory=dict)
    depth: Optional[int] = None
    into: Tuple[str, ...] = ()
    image_url: str = ""

    @classmethod
    def from_catalog(cls, item_id: str, entry: Mapping[str, Any], image_url: str = "") -> "RawItem":
        return cls(
            item_id=str(item_id),
            name=str(entry.get("name") or ""),
            plaintext=str(entry.get("plaintext") or ""),
            description=entry.get("description") or "",
            stats=dict(entry.get("stats") or {}),
            tags=tuple(entry.get("tags") or ()),
            maps=dict(entry.get("maps") or {}),
            gold=dict(entry.get("gold") or {}),
            depth=entry.get("depth"),
            into=tuple(entry.get("into") or ()),
            image_url=image_url,
        )

    @property
    def purchasable(self) -> bool:
        return bool(self.gold.get("purchasable"))


@dataclass(frozen=True)
class Ability:
    name: str
    description: str


@dataclass(frozen=True)
class ParsedDescription:
    """
    Structured fields pulled out of an item's description markup.
    Passives keep first-appearance order; a repeated name keeps the
    last description seen.
    """
    stats: Tuple[str, ...] = ()
    passives: Dict[str, Ability] = field(default_factory=dict)
    active: Optional[Ability] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stats": list(self.stats),
            "passives": {
                name: {"description": ability.description}
                for name, ability in self.passives.items()
            },
            "active": (
                {"name": self.active.name, "description": self.active.description}
                if self.active is not None
                else None
            ),
        }
