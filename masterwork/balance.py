# masterwork/balance.py
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

HEALTH = "Health"

# Gold cost of one point of each upgradeable stat
GOLD_VALUES: Mapping[str, float] = MappingProxyType({
    "Ability Haste": 31.25,
    "Ability Power": 20,
    "Attack Damage": 35,
    "Attack Speed": 30,
    "Armor": 20,
    "Magic Resistance": 18,
    HEALTH: 2.6,  # flat fallback; see HEALTH_GOLD_VALUES
})

# Health's gold-per-point depends on how many upgradeable stats share the budget
HEALTH_GOLD_VALUES: Mapping[int, float] = MappingProxyType({
    1: 2.666666666666,
    2: 2.702702702702,
    3: 2.666666666666,
    4: 2.777777777777,
})

GOLD_PER_ITEM = 1000


@dataclass(frozen=True)
class BalanceTable:
    gold_values: Mapping[str, float] = field(default_factory=lambda: dict(GOLD_VALUES))
    health_gold_values: Mapping[int, float] = field(default_factory=lambda: dict(HEALTH_GOLD_VALUES))
    gold_per_item: float = GOLD_PER_ITEM

    def __post_init__(self):
        # Tables are read-only once built
        object.__setattr__(self, "gold_values", MappingProxyType(dict(self.gold_values)))
        object.__setattr__(self, "health_gold_values", MappingProxyType(dict(self.health_gold_values)))

    def is_upgradeable(self, stat_name: Optional[str]) -> bool:
        return stat_name in self.gold_values

    def gold_per_point(self, stat_name: str, upgradeable_count: int) -> float:
        if stat_name == HEALTH:
            rate = self.health_gold_values.get(upgradeable_count)
            if rate:
                return rate
        return self.gold_values[stat_name]

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "BalanceTable":
        """
        Build a table from the "balance" section of config.json. Missing keys
        keep the defaults. Raises ValueError on malformed values.
        """
        if not isinstance(cfg, Mapping):
            raise ValueError("'balance' must be an object.")

        gold_values = dict(GOLD_VALUES)
        if "gold_values" in cfg:
            gold_values = _positive_rates(cfg["gold_values"], "gold_values")

        health = dict(HEALTH_GOLD_VALUES)
        if "health_gold_values" in cfg:
            raw = _positive_rates(cfg["health_gold_values"], "health_gold_values")
            try:
                health = {int(k): v for k, v in raw.items()}
            except ValueError:
                raise ValueError("'health_gold_values' keys must be integers.")

        budget = cfg.get("gold_per_item", GOLD_PER_ITEM)
        if isinstance(budget, bool) or not isinstance(budget, (int, float)) or budget < 0:
            raise ValueError("'gold_per_item' must be a non-negative number.")

        return cls(gold_values=gold_values, health_gold_values=health, gold_per_item=budget)


def _positive_rates(value: Any, key: str) -> Dict[str, float]:
    if not isinstance(value, Mapping) or not value:
        raise ValueError(f"'{key}' must be a non-empty object.")
    out: Dict[str, float] = {}
    for name, rate in value.items():
        if isinstance(rate, bool) or not isinstance(rate, (int, float)) or rate <= 0:
            raise ValueError(f"'{key}' entry {name!r} must be a positive number.")
        out[str(name)] = rate
    return out


DEFAULT_BALANCE = BalanceTable()
