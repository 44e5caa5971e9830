"""Turn message lists into display text, with optional ANSI colors"""

import datetime
import json
import math
import re
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator, List, Optional, Set

import colorama

colorama.just_fix_windows_console()

_DIRECTIVE = re.compile(r"%([sdifjoOc%])")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_CONTAINERS = (list, tuple, set, frozenset, dict)


class TextColor(Enum):
    red = "RED"
    green = "GREEN"
    yellow = "YELLOW"
    magenta = "MAGENTA"
    cyan = "CYAN"


class TextStyle(Enum):
    bright = "BRIGHT"


class _AnsiColorBackend:
    def __init__(self, use_colors: bool = True) -> None:
        self.use_colors = use_colors

    def make_colored(self, text: str, color: Optional[TextColor], style: Optional[TextStyle]) -> str:
        if not self.use_colors or (color is None and style is None):
            return text
        prefix = getattr(colorama.Style, style.value) if style is not None else ""
        if color is not None:
            prefix += getattr(colorama.Fore, color.value)
        return prefix + text + colorama.Style.RESET_ALL


_COLOR_BACKEND = _AnsiColorBackend()


@contextmanager
def text_color_options(use_colors: bool = True) -> Iterator[None]:
    """Temporarily switch ANSI colors on or off for all formatting."""
    global _COLOR_BACKEND
    backend = _COLOR_BACKEND
    _COLOR_BACKEND = _AnsiColorBackend(use_colors)
    try:
        yield
    finally:
        _COLOR_BACKEND = backend


def make_colored(text: str,
                 color: Optional[TextColor] = None,
                 style: Optional[TextStyle] = None) -> str:
    return _COLOR_BACKEND.make_colored(text, color, style)


def _stylize(text: str, colors: bool, color: Optional[TextColor] = None, style: Optional[TextStyle] = None) -> str:
    return make_colored(text, color, style) if colors else text


def inspect_value(value: Any, colors: bool = True, _seen: Optional[Set[int]] = None) -> str:
    """
    Render a value the way it would appear in source, colored by kind.

    Containers are rendered recursively; a container that contains itself
    is shown as `[...]` or `{...}`.
    """
    if isinstance(value, str):
        return _stylize(repr(value), colors, TextColor.green)
    if isinstance(value, (bool, int, float, complex)):
        return _stylize(repr(value), colors, TextColor.yellow)
    if value is None:
        return _stylize("None", colors, style=TextStyle.bright)
    if isinstance(value, re.Pattern):
        return _stylize(repr(value), colors, TextColor.red)
    if isinstance(value, (datetime.date, datetime.time)):
        return _stylize(value.isoformat(), colors, TextColor.magenta)
    if isinstance(value, _CONTAINERS):
        seen = set() if _seen is None else _seen
        if id(value) in seen:
            return "{...}" if isinstance(value, dict) else "[...]"
        seen.add(id(value))
        try:
            return _inspect_container(value, colors, seen)
        finally:
            seen.discard(id(value))
    if callable(value):
        return _stylize(repr(value), colors, TextColor.cyan)
    return repr(value)


def _inspect_container(value: Any, colors: bool, seen: Set[int]) -> str:
    if isinstance(value, dict):
        items = ", ".join(
            f"{inspect_value(k, colors, seen)}: {inspect_value(v, colors, seen)}" for k, v in value.items()
        )
        return "{" + items + "}"
    parts: List[str] = [inspect_value(item, colors, seen) for item in value]
    if isinstance(value, list):
        return "[" + ", ".join(parts) + "]"
    if isinstance(value, tuple):
        return "(" + parts[0] + ",)" if len(parts) == 1 else "(" + ", ".join(parts) + ")"
    if not parts:
        return f"{type(value).__name__}()"
    body = "{" + ", ".join(parts) + "}"
    return body if isinstance(value, set) else f"frozenset({body})"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _float_text(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if number.is_integer():
        return str(int(number))
    return str(number)


def _number_text(value: Any) -> str:
    """`%d`: ints stay exact; whole strings must be numeric."""
    if _is_int(value):
        return str(value)
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return "0"
        try:
            return str(int(text))
        except ValueError:
            pass
    try:
        return _float_text(float(value))
    except (TypeError, ValueError):
        return "NaN"


def _integer_text(value: Any) -> str:
    """`%i`: leading integer part, so "12abc" gives 12."""
    if _is_int(value):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if math.isfinite(value) else "NaN"
    match = _INT_PREFIX.match(str(value))
    return str(int(match.group(1))) if match else "NaN"


def _float_prefix_text(value: Any) -> str:
    """`%f`: leading decimal part, so "1.5px" gives 1.5."""
    if _is_int(value):
        return str(value)
    if isinstance(value, float):
        return _float_text(value)
    match = _FLOAT_PREFIX.match(str(value))
    return _float_text(float(match.group(1))) if match else "NaN"


def _json_text(value: Any) -> str:
    try:
        return json.dumps(value, default=str)
    except ValueError:
        return "[Circular]"


def _plain_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, _CONTAINERS):
        return inspect_value(value, colors=False)
    return str(value)


def format_messages(*msgs: Any, colors: bool = True) -> str:
    """
    Join `msgs` into a single string.

    A leading string is treated as a format string supporting `%s`, `%d`,
    `%i`, `%f`, `%j`, `%o`, `%O`, `%c` and `%%`. A directive with no argument
    left stays as written. Arguments not consumed by directives are
    appended, separated by a space; strings verbatim and everything else
    through `inspect_value`.
    """
    if not msgs:
        return ""
    first, rest = msgs[0], list(msgs[1:])
    if isinstance(first, str):
        if not rest:
            return first
        consumed = 0

        def substitute(match: "re.Match[str]") -> str:
            nonlocal consumed
            directive = match.group(1)
            if directive == "%":
                return "%"
            if consumed >= len(rest):
                return match.group(0)
            arg = rest[consumed]
            consumed += 1
            if directive == "s":
                return _plain_text(arg)
            if directive == "d":
                return _number_text(arg)
            if directive == "i":
                return _integer_text(arg)
            if directive == "f":
                return _float_prefix_text(arg)
            if directive == "j":
                return _json_text(arg)
            if directive in "oO":
                return inspect_value(arg, colors)
            return ""

        head = _DIRECTIVE.sub(substitute, first)
        rest = rest[consumed:]
    else:
        head = inspect_value(first, colors)

    parts = [head]
    parts.extend(arg if isinstance(arg, str) else inspect_value(arg, colors) for arg in rest)
    return " ".join(parts)
