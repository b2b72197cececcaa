"""d3-format style specifiers mapped onto Python's format mini-language.

Tick formats are written the way chart authors already know them from d3
(``"%"``, ``".1%"``, ``",.2f"``, ``"~g"``). The grammar is

    [[fill]align][sign][symbol][0][width][,][.precision][~][type]

and most of it has a direct Python equivalent. ``~`` (trim insignificant
trailing zeros) and the ``$`` currency symbol are applied after formatting.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Callable

_SPECIFIER_RE = re.compile(
    r"^(?:(.)?([<>=^]))?([+\-( ])?([$#])?(0)?(\d+)?(,)?(\.\d+)?(~)?([a-z%])?$",
    re.IGNORECASE,
)

# Types understood by both d3 and Python's float formatting.
_FLOAT_TYPES = {"e", "f", "g", "%", ""}
_INT_TYPES = {"d", "b", "o", "x", "X"}

_TRAILING_ZEROS_RE = re.compile(r"(\.\d*?)0+(?=e|%|$)")


@dataclass(frozen=True)
class FormatSpecifier:
    fill: str = " "
    align: str = ">"
    sign: str = "-"
    symbol: str = ""
    zero: bool = False
    width: int | None = None
    comma: bool = False
    precision: int | None = None
    trim: bool = False
    type: str = ""

    def with_precision(self, precision: int) -> "FormatSpecifier":
        return replace(self, precision=precision)


def parse_specifier(specifier: str) -> FormatSpecifier:
    """Parse a d3 format specifier string."""
    match = _SPECIFIER_RE.match(specifier)
    if match is None:
        raise ValueError(f"Invalid format specifier: {specifier!r}")

    fill, align, sign, symbol, zero, width, comma, precision, trim, type_ = match.groups()
    type_ = type_ or ""

    # d3's "n" is shorthand for ",g"
    if type_ == "n":
        comma, type_ = ",", "g"
    if type_ not in _FLOAT_TYPES and type_ not in _INT_TYPES:
        raise ValueError(f"Unsupported format type {type_!r} in {specifier!r}")

    if zero or (fill == "0" and align == "="):
        zero, fill, align = True, "0", "="

    return FormatSpecifier(
        fill=fill or " ",
        align=align or ">",
        sign="-" if sign in (None, "(") else sign,
        symbol=symbol or "",
        zero=bool(zero),
        width=int(width) if width else None,
        comma=bool(comma),
        precision=int(precision[1:]) if precision else None,
        trim=bool(trim),
        type=type_,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _trim_zeros(text: str) -> str:
    text = _TRAILING_ZEROS_RE.sub(r"\1", text)
    return re.sub(r"\.(?=e|%|$)", "", text)


def _python_spec(spec: FormatSpecifier, padded: bool) -> str:
    parts = []
    if padded:
        parts.append(f"{spec.fill}{spec.align}")
        parts.append(spec.sign)
    if spec.symbol == "#":
        parts.append("#")
    if padded and spec.width is not None:
        parts.append(str(spec.width))
    if spec.comma:
        parts.append(",")
    if spec.precision is not None and spec.type not in _INT_TYPES:
        parts.append(f".{spec.precision}")
    if spec.type == "":
        # Bare precision in d3 means significant digits, like Python's "g"
        parts.append("g" if spec.precision is not None else "")
    else:
        parts.append(spec.type)
    return "".join(parts)


def make_formatter(specifier: str | FormatSpecifier) -> Callable[[float], str]:
    """Return a callable turning a number into text for the given specifier."""
    spec = parse_specifier(specifier) if isinstance(specifier, str) else specifier

    # Trimming and "$" rewrite the text, so sign and padding are applied by hand
    post_process = spec.trim or spec.symbol == "$"
    python_spec = _python_spec(spec, padded=not post_process)

    def fmt(value: float) -> str:
        number: float | int = _round_half_up(value) if spec.type in _INT_TYPES else value
        if not post_process:
            return format(number, python_spec)

        text = format(abs(number), python_spec)
        if spec.trim:
            text = _trim_zeros(text)
        if spec.symbol == "$":
            text = "$" + text
        if number < 0:
            text = "-" + text
        elif spec.sign in ("+", " "):
            text = spec.sign + text
        if spec.width is not None:
            align = ">" if spec.align == "=" else spec.align
            text = format(text, f"{spec.fill}{align}{spec.width}")
        return text

    return fmt
