"""Station-code and friendly-name formatting for line labels.

Cosmetic only: assignment and transport never depend on these strings.
Formatters are swappable behind :class:`LabelFormatter`.
"""

from __future__ import annotations

import re
from typing import Protocol

ROLE_TOKENS = frozenset(
    {"CTR", "CENTER", "CENTRE", "APP", "APCH", "APPROACH", "DEP", "DEPARTURE", "TWR", "TOWER", "ACC", "AREA"}
)
GROUND_TOKENS = frozenset({"GND", "GROUND", "GRND"})

_SEPARATORS = re.compile(r"[_-]+")


class LabelFormatter(Protocol):
    """Turns a line name into ``(station_code, friendly_name)``."""

    def label_for(self, name: str) -> tuple[str, str]: ...


def words_from_name(name: str) -> list[str]:
    """Split on whitespace, underscores, and hyphens; uppercase each token."""
    return [w.upper() for w in _SEPARATORS.sub(" ", name or "").split()]


def _title(value: str) -> str:
    return value[:1].upper() + value[1:].lower()


class StationLabelFormatter:
    """Heuristics for ``<prefix> <location> <role>`` style sector names.

    * ``ML MUN CTR`` → ``MUN`` / ``Mungo`` (role suffix, alias table)
    * ``SY GND`` → ``SY SMC`` / ``Sydney Gr`` (ground suffix)
    * ``Sydney Approach North`` → ``SAN`` (initials)

    Args:
        aliases: Location token → ``{"code": ..., "label": ...}`` overrides.
    """

    def __init__(self, aliases: dict[str, dict[str, str]] | None = None) -> None:
        self._aliases = {k.upper(): v for k, v in (aliases or {}).items()}

    def label_for(self, name: str) -> tuple[str, str]:
        tokens = words_from_name(name)
        return self.station_code(tokens), self.friendly_name(tokens)

    def station_code(self, tokens: list[str]) -> str:
        if not tokens:
            return ""
        if len(tokens) >= 3 and tokens[-1] in ROLE_TOKENS:
            location = self._pick_location(tokens)
            return self._aliases.get(location, {}).get("code") or location[:3]
        if len(tokens) == 2 and tokens[1] in GROUND_TOKENS:
            return f"{tokens[0]} SMC"
        if len(tokens) >= 3:
            return "".join(w[0] for w in tokens[:3])
        if len(tokens) == 2:
            return f"{tokens[0]} {tokens[1]}"
        return tokens[0][:3]

    def friendly_name(self, tokens: list[str]) -> str:
        if not tokens:
            return ""
        if len(tokens) >= 2 and tokens[-1] in ROLE_TOKENS:
            return self._prettify(self._pick_location(tokens), tokens[-1])
        if len(tokens) == 2 and tokens[1] in GROUND_TOKENS:
            return f"{self._prettify(tokens[0])} Gr"
        return " ".join(_title(w) for w in tokens)

    @staticmethod
    def _pick_location(tokens: list[str]) -> str:
        if len(tokens) >= 2 and tokens[-1] in ROLE_TOKENS:
            return tokens[-2]
        return tokens[0] if tokens else ""

    def _prettify(self, location: str, role: str | None = None) -> str:
        if not location:
            return ""
        label = self._aliases.get(location, {}).get("label")
        if label:
            return label
        if role and role in GROUND_TOKENS:
            return f"{_title(location)} Gr"
        return _title(location)


class InitialsLabelFormatter:
    """Plain formatter: initials of up to three words, and the title-cased name."""

    def label_for(self, name: str) -> tuple[str, str]:
        tokens = words_from_name(name)
        if not tokens:
            return "", ""
        code = tokens[0][:3] if len(tokens) == 1 else "".join(w[0] for w in tokens[:3])
        return code, " ".join(_title(w) for w in tokens)
