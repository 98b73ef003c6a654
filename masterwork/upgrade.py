# masterwork/upgrade.py
import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence, Tuple

from .balance import DEFAULT_BALANCE, HEALTH, BalanceTable
from .logger import get_logger
from .models import InvalidInputError

logger = get_logger(__name__)

# Name may not contain line terminators, "\r" and U+2028/U+2029 included
STAT_LINE_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s([^\n\r\u2028\u2029]+)")

# At or past this magnitude the value is printed as is, without 2dp
FIXED_LIMIT = 1e21


def parse_stat_line(line: str) -> Tuple[Optional[float], Optional[str]]:
    """Split "50 Attack Damage" into (50.0, "Attack Damage"); (None, None) otherwise."""
    m = STAT_LINE_RE.fullmatch(line)
    if not m:
        return None, None
    return float(m.group(1)), m.group(2).strip()


def _plain_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def format_stat_value(value: float) -> str:
    """
    Two decimal places, half-up on the exact binary value (0.125 -> "0.13").
    Non-finite values and magnitudes of 1e21 or more come back unrounded,
    e.g. "1e+30" or "Infinity".
    """
    if not math.isfinite(value) or abs(value) >= FIXED_LIMIT:
        return _plain_number(value)
    exact = Decimal(value)
    # integer digits + 2 places, with headroom for the rounding carry
    context = Context(prec=max(exact.adjusted(), 0) + 4)
    return str(exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP, context=context))


def _check_stats(stats: Sequence[str]) -> None:
    if isinstance(stats, (str, bytes)) or not isinstance(stats, (list, tuple)):
        raise InvalidInputError(
            f"stats must be a list of str, got {type(stats).__name__}"
        )
    for line in stats:
        if not isinstance(line, str):
            raise InvalidInputError(
                f"stat lines must be str, got {type(line).__name__}"
            )


def adjust_stats(stats: Sequence[str], balance: BalanceTable = DEFAULT_BALANCE) -> List[str]:
    """
    Spend the item budget evenly across the upgradeable stat lines.

    Every line whose stat name is in the gold table receives
    budget / N gold, converted at that stat's gold-per-point. Health is
    converted at a rate chosen by N. Other lines come back verbatim and
    in place.
    """
    _check_stats(stats)

    parsed = [parse_stat_line(line) for line in stats]
    upgradeable = sum(1 for _, name in parsed if balance.is_upgradeable(name))
    if not upgradeable:
        return list(stats)

    share = balance.gold_per_item / upgradeable
    has_health = balance.is_upgradeable(HEALTH) and any(name == HEALTH for _, name in parsed)
    if has_health and upgradeable not in balance.health_gold_values:
        # TODO: confirm whether 5+ upgradeable stats should have their own Health rate
        logger.debug(
            "No Health rate for %d upgradeable stats; using flat rate %s.",
            upgradeable, balance.gold_values.get(HEALTH),
        )

    out: List[str] = []
    for line, (value, name) in zip(stats, parsed):
        if not balance.is_upgradeable(name):
            out.append(line)
            continue
        new_value = value + share / balance.gold_per_point(name, upgradeable)
        out.append(f"{format_stat_value(new_value)} {name}")
    return out
