# This library is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This library is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this library; if not, see <http://www.gnu.org/licenses/>.

"""
preoccupied.semrange.normalize
Rewrite shorthand range syntax into plain comparator text.

The rewrite is a fixed pipeline of pure ``str -> str`` stages, applied to
each ``||``-separated group in order:

1. hyphen ranges        ``1.2 - 2.3.4``  ->  ``>=1.2.0 <=2.3.4``
2. operator trimming    ``>= 1.2.3``     ->  ``>=1.2.3``
3. tilde ranges         ``~1.2.3``       ->  ``>=1.2.3 <1.3.0``
4. caret ranges         ``^0.2.3``       ->  ``>=0.2.3 <0.3.0``
5. X-ranges             ``1.2.x``        ->  ``>=1.2.0 <1.3.0``
6. star removal         ``>=1.0.0 *``    ->  ``>=1.0.0``

Later stages rely on the shape produced by earlier ones, so the order is
significant. Normalizing text that is already canonical changes nothing.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
import re
from typing import Callable, Iterable, Optional, Tuple

from .comparator import GTLT
from .version import BUILD, NUMERIC_IDENTIFIER, PRERELEASE, Version


__all__ = (
    "PIPELINE",
    "normalize",
    "normalize_group",
    "replace_carets",
    "replace_hyphens",
    "replace_stars",
    "replace_tildes",
    "replace_xranges",
    "split_groups",
    "trim_operators",
)


logger = logging.getLogger(__name__)


# Something like "2.*" or "1.2.x". Only the major is required, and the
# groups are: major, minor, patch, prerelease, build
XRANGE_IDENTIFIER = rf"{NUMERIC_IDENTIFIER}|x|X|\*"
XRANGE_PLAIN = (
    rf"[v=\s]*({XRANGE_IDENTIFIER})"
    rf"(?:\.({XRANGE_IDENTIFIER})"
    rf"(?:\.({XRANGE_IDENTIFIER})"
    rf"(?:{PRERELEASE})?{BUILD}?)?)?")

_OR = re.compile(r"\s*\|\|\s*")

_HYPHEN_RANGE = re.compile(
    rf"^\s*({XRANGE_PLAIN})\s+-\s+({XRANGE_PLAIN})\s*$")

_COMPARATOR_TRIM = re.compile(rf"(\s*){GTLT}\s*({XRANGE_PLAIN})")
_TILDE_TRIM = re.compile(r"(\s*)~>?\s+")
_CARET_TRIM = re.compile(r"(\s*)\^\s+")

_TILDE = re.compile(rf"^~>?(?:{XRANGE_PLAIN})?$")
_CARET = re.compile(rf"^\^(?:{XRANGE_PLAIN})?$")
_XRANGE = re.compile(rf"^{GTLT}\s*{XRANGE_PLAIN}$")
_STAR = re.compile(r"^(?:<|>)?=?\*$")


def _is_x(ident: Optional[str]) -> bool:
    return not ident or ident in ("x", "X", "*")


def _pre(prerelease: Optional[str]) -> str:
    return f"-{prerelease}" if prerelease else ""


def _per_term(replace: Callable[[str], str], text: str) -> str:
    """
    Apply `replace` to each space-delimited term, dropping any that
    rewrite to nothing.
    """

    return " ".join(filter(None, (replace(term) for term in text.split())))


def split_groups(text: str) -> Tuple[str, ...]:
    """
    Split range text on ``||`` into its OR-groups, trimming each.
    """

    return tuple(_OR.split(text.strip()))


def replace_hyphens(text: str) -> str:
    """
    ``1.2.3 - 2.3.4`` to ``>=1.2.3 <=2.3.4``. Partial bounds are widened:
    a partial lower bound fills in zeroes, and a partial upper bound
    becomes exclusive on the next minor or major.
    """

    found = _HYPHEN_RANGE.match(text)
    if found is None:
        return text

    (low, l_major, l_minor, l_patch, _l_pre, _l_build,
     high, h_major, h_minor, h_patch, h_pre, _h_build) = found.groups()

    if _is_x(l_major):
        low = ""
    elif _is_x(l_minor):
        low = f">={l_major}.0.0"
    elif _is_x(l_patch):
        low = f">={l_major}.{l_minor}.0"
    else:
        low = ">=" + low.lstrip("v= \t")

    if _is_x(h_major):
        high = ""
    elif _is_x(h_minor):
        high = "<" + Version(int(h_major)).bump_major().format()
    elif _is_x(h_patch):
        high = "<" + Version(int(h_major), int(h_minor)).bump_minor().format()
    elif h_pre:
        high = f"<={h_major}.{h_minor}.{h_patch}-{h_pre}"
    else:
        high = "<=" + high.lstrip("v= \t")

    result = f"{low} {high}".strip()
    logger.debug("hyphen %r -> %r", text, result)
    return result


def trim_operators(text: str) -> str:
    """
    Remove whitespace between operators and their versions, so
    ``> 1.2.3 ~ 1.4 ^ 2`` becomes ``>1.2.3 ~1.4 ^2``, and collapse any
    remaining runs of whitespace to a single space.
    """

    text = _COMPARATOR_TRIM.sub(r"\1\2\3", text)
    text = _TILDE_TRIM.sub(r"\1~", text)
    text = _CARET_TRIM.sub(r"\1^", text)
    return " ".join(text.split())


def _replace_tilde(term: str) -> str:
    found = _TILDE.match(term)
    if found is None:
        return term

    major, minor, patch, prerelease, _build = found.groups()

    if _is_x(major):
        result = ""
    elif _is_x(minor):
        result = f">={major}.0.0 <{int(major) + 1}.0.0"
    elif _is_x(patch):
        # ~1.2 == >=1.2.0 <1.3.0
        result = f">={major}.{minor}.0 <{major}.{int(minor) + 1}.0"
    else:
        # ~1.2.3 == >=1.2.3 <1.3.0
        result = (f">={major}.{minor}.{patch}{_pre(prerelease)}"
                  f" <{major}.{int(minor) + 1}.0")

    logger.debug("tilde %r -> %r", term, result)
    return result


def replace_tildes(text: str) -> str:
    """
    ``~1.2.3`` to ``>=1.2.3 <1.3.0``, ``~1.2`` to ``>=1.2.0 <1.3.0``, and
    ``~1`` to ``>=1.0.0 <2.0.0``. ``~>`` is treated identically.
    """

    return _per_term(_replace_tilde, text)


def _replace_caret(term: str) -> str:
    found = _CARET.match(term)
    if found is None:
        return term

    major, minor, patch, prerelease, _build = found.groups()

    if _is_x(major):
        result = ""

    elif _is_x(minor):
        result = f">={major}.0.0 <{int(major) + 1}.0.0"

    elif _is_x(patch):
        if major == "0":
            result = f">={major}.{minor}.0 <{major}.{int(minor) + 1}.0"
        else:
            result = f">={major}.{minor}.0 <{int(major) + 1}.0.0"

    else:
        low = f">={major}.{minor}.{patch}{_pre(prerelease)}"
        if major != "0":
            high = f"<{int(major) + 1}.0.0"
        elif minor != "0":
            high = f"<0.{int(minor) + 1}.0"
        else:
            high = f"<0.0.{int(patch) + 1}"
        result = f"{low} {high}"

    logger.debug("caret %r -> %r", term, result)
    return result


def replace_carets(text: str) -> str:
    """
    ``^1.2.3`` to ``>=1.2.3 <2.0.0``. The upper bound is placed on the
    left-most non-zero component, so ``^0.2.3`` allows only ``0.2.x`` and
    ``^0.0.3`` allows only ``0.0.3``.
    """

    return _per_term(_replace_caret, text)


def _replace_xrange(term: str) -> str:
    found = _XRANGE.match(term)
    if found is None:
        return term

    gtlt, major, minor, patch, _prerelease, _build = found.groups()

    x_major = _is_x(major)
    x_minor = x_major or _is_x(minor)
    x_patch = x_minor or _is_x(patch)
    any_x = x_patch

    if gtlt == "=" and any_x:
        gtlt = ""

    if x_major:
        if gtlt in (">", "<"):
            # nothing is allowed
            result = "<0.0.0"
        else:
            # nothing is forbidden
            result = "*"

    elif gtlt and any_x:
        major = int(major)
        minor = 0 if x_minor else int(minor)
        patch = 0

        if gtlt == ">":
            # >1 => >=2.0.0, >1.2 => >=1.3.0
            gtlt = ">="
            if x_minor:
                major += 1
                minor = 0
            else:
                minor += 1

        elif gtlt == "<=":
            # <=0.7.x is actually <0.8.0, since any 0.7.x should pass
            gtlt = "<"
            if x_minor:
                major += 1
            else:
                minor += 1

        result = f"{gtlt}{major}.{minor}.{patch}"

    elif x_minor:
        result = f">={major}.0.0 <{int(major) + 1}.0.0"

    elif x_patch:
        result = f">={major}.{minor}.0 <{major}.{int(minor) + 1}.0"

    else:
        result = term

    logger.debug("xrange %r -> %r", term, result)
    return result


def replace_xranges(text: str) -> str:
    """
    Expand partial versions and ``x``/``X``/``*`` placeholders, with or
    without a leading operator. ``1.2.x`` becomes ``>=1.2.0 <1.3.0``,
    ``>1.2`` becomes ``>=1.3.0``, and ``<=1.x`` becomes ``<2.0.0``.
    """

    return _per_term(_replace_xrange, text)


def replace_stars(text: str) -> str:
    """
    Drop standalone ``*`` terms. A star is AND-ed with everything else in
    its group and matches anything, so it contributes no constraint.
    """

    return _per_term(lambda term: "" if _STAR.match(term) else term, text)


PIPELINE: Tuple[Callable[[str], str], ...] = (
    replace_hyphens,
    trim_operators,
    replace_tildes,
    replace_carets,
    replace_xranges,
    replace_stars,
)


def normalize_group(text: str, stages: Iterable[Callable[[str], str]] = PIPELINE) -> str:
    """
    Run a single OR-group through the rewrite stages.
    """

    text = text.strip()
    for stage in stages:
        text = stage(text)
        logger.debug("%s: %r", stage.__name__, text)
    return text


def normalize(text: str) -> str:
    """
    Rewrite a complete range expression into canonical comparator text,
    with each OR-group normalized independently.

    :param text: A range such as ``"^1.2 || 2.x"``
    :return: Canonical text such as ``">=1.2.0 <2.0.0 || >=2.0.0 <3.0.0"``
    """

    return " || ".join(normalize_group(group) for group in split_groups(text))


# The end.
