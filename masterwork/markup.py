# masterwork/markup.py
import html
import re
from typing import Dict, List, Optional

from .models import Ability, InvalidInputError, ParsedDescription

TAG_RE = re.compile(r"<[^>]+>")
BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
STATS_RE = re.compile(r"<stats>(.*?)</stats>", re.DOTALL)

# A block ends at the next block opener, at </mainText>, or at end of text
PASSIVE_RE = re.compile(
    r"<passive>(.*?)</passive>\s*<br\s*/?>\s*(.*?)(?=<passive>|<active>|</mainText>|\Z)",
    re.IGNORECASE | re.DOTALL,
)
ACTIVE_RE = re.compile(
    r"<active>(.*?)</active>\s*<br\s*/?>\s*(.*?)(?=<passive>|</mainText>|\Z)",
    re.IGNORECASE | re.DOTALL,
)


def strip_tags(text: str) -> str:
    """Remove every <...> run. Tag names and nesting are not checked."""
    return TAG_RE.sub("", text)


def _clean(fragment: str) -> str:
    return strip_tags(fragment).strip()


def extract_stats(text: str) -> List[str]:
    m = STATS_RE.search(text)
    if not m:
        return []
    lines = (_clean(part) for part in BREAK_RE.split(m.group(1)))
    return [line for line in lines if line]


def extract_passives(text: str) -> Dict[str, Ability]:
    passives: Dict[str, Ability] = {}
    for m in PASSIVE_RE.finditer(text):
        name = _clean(m.group(1))
        description = _clean(m.group(2))
        if not name or not description:
            continue
        passives[name] = Ability(name=name, description=description)
    return passives


def extract_active(text: str) -> Optional[Ability]:
    m = ACTIVE_RE.search(text)
    if not m:
        return None
    return Ability(name=_clean(m.group(1)), description=_clean(m.group(2)))


def extract_description(markup: str) -> ParsedDescription:
    """
    Parse one item's description markup into stats, passives and active.

    Entities are decoded before any structural matching, so markup that
    arrives as &lt;passive&gt; is seen as a real tag. Text with no
    recognizable blocks gives empty stats, no passives and no active.
    """
    if not isinstance(markup, str):
        raise InvalidInputError(
            f"description markup must be a str, got {type(markup).__name__}"
        )

    text = html.unescape(markup)
    return ParsedDescription(
        stats=tuple(extract_stats(text)),
        passives=extract_passives(text),
        active=extract_active(text),
    )
