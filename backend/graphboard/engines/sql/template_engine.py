"""
SQL template engine for ``:name`` query parameters.

Parses parameter names from a template and renders the final SQL by
substituting each supplied value as a type-formatted literal.

Placeholders are matched with ASCII word characters only. A placeholder is
replaced only as a whole word, so a value for ``:start`` never touches
``:start_date``. Placeholders without a value are left in the SQL unchanged.

Performance: compiled placeholder patterns are cached in an LRU dict keyed by
parameter name, so repeated renders skip ``re.compile``.
"""

import re
import threading
from collections import OrderedDict
from collections.abc import Mapping

from graphboard.engines.sql.filters import format_literal

_PARAM_RE = re.compile(r":(\w+)", re.ASCII)

_CACHE_MAX_SIZE = 512
_pattern_cache: OrderedDict[str, re.Pattern[str]] = OrderedDict()
_cache_lock = threading.Lock()


def _placeholder_pattern(name: str) -> re.Pattern[str]:
    """Return the compiled ``:name\\b`` pattern from cache or compile & cache it."""
    with _cache_lock:
        pattern = _pattern_cache.get(name)
        if pattern is not None:
            _pattern_cache.move_to_end(name)
            return pattern
    pattern = re.compile(rf":{re.escape(name)}\b", re.ASCII)
    with _cache_lock:
        _pattern_cache[name] = pattern
        if len(_pattern_cache) > _CACHE_MAX_SIZE:
            _pattern_cache.popitem(last=False)
    return pattern


class SQLTemplateEngine:
    """Renders ``:name`` SQL templates and parses parameter names."""

    def render(
        self,
        template: str,
        values: Mapping[str, str],
        types: Mapping[str, str] | None = None,
    ) -> str:
        """
        Substitute every value in *values* into *template*.

        *types* maps names to ``text|number|date|datetime``; names missing
        from it are formatted as text. Never raises for unknown or unused
        names.
        """
        _types = types or {}
        result = template
        for name, value in values.items():
            literal = format_literal(value, _types.get(name))
            # Callable replacement: the literal may contain backslashes.
            result = _placeholder_pattern(name).sub(lambda _m: literal, result)
        return result

    def parse_parameters(self, template: str) -> list[str]:
        """Distinct ``:name`` parameter names in order of first appearance."""
        return list(dict.fromkeys(_PARAM_RE.findall(template)))
