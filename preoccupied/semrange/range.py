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
preoccupied.semrange.range
Range expressions: OR-groups of AND-ed comparators, and selection of the
versions that satisfy them.

Example:

```python
r = Range.parse("^1.2.3 || >=3.0.0-rc.1 <3.1.0")
assert r.satisfies("1.8.1")
assert not r.satisfies("2.0.0")
assert str(r) == ">=1.2.3 <2.0.0 || >=3.0.0-rc.1 <3.1.0"

assert max_satisfying(["1.2.3", "1.9.0", "2.0.0"], r) == Version.parse("1.9.0")
```

A version carrying a prerelease tag only satisfies a group that mentions a
prerelease on the same major.minor.patch, so ``^1.2.3`` does not admit
``1.3.0-beta``. Passing ``include_prerelease=True`` lifts that restriction.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple, Union

from pydantic import GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import TypeAlias

from .comparator import Comparator
from .errors import MalformedComparator, MalformedRange
from .normalize import normalize_group, split_groups
from .version import Version, VersionLike, ensure_version


__all__ = (
    "Range",
    "RangeLike",
    "ensure_range",
    "max_satisfying",
    "min_satisfying",
    "must_parse_range",
    "parse_range",
    "satisfies",
)


logger = logging.getLogger(__name__)


Conjunction: TypeAlias = Tuple[Comparator, ...]


@dataclass(frozen=True)
class Range:
    """
    A set of comparator conjunctions. A version satisfies the range if it
    satisfies every comparator of at least one conjunction.
    """

    groups: Tuple[Conjunction, ...]
    raw: str = field(default="", compare=False)
    include_prerelease: bool = False


    @classmethod
    def parse(
            cls,
            text: str,
            *,
            include_prerelease: bool = False) -> "Range":
        """
        Parse a range expression.

        :param text: The range, eg. ``">=1.0.0 <2.0.0 || ^3.1"``. An empty
          string matches every version.
        :param include_prerelease: Allow prerelease versions to satisfy
          comparators that do not themselves mention a prerelease
        :raises MalformedRange: if any comparator fails to parse
        """

        if not isinstance(text, str):
            raise TypeError(f"Unsupported range value: {text!r}")

        groups = []
        for group in split_groups(text):
            canonical = normalize_group(group)
            if not canonical:
                groups.append((Comparator.any(),))
                continue

            comparators = []
            for token in canonical.split(" "):
                try:
                    comparators.append(Comparator.parse(token))
                except MalformedComparator as err:
                    raise MalformedRange(text, group, token) from err
            groups.append(tuple(comparators))

        result = cls(tuple(groups), raw=text,
                     include_prerelease=include_prerelease)
        logger.debug("range %r parsed as %r", text, str(result))
        return result


    def _test(self, group: Conjunction, version: Version) -> bool:
        for comparator in group:
            if not comparator.satisfies(version):
                return False

        if version.is_prerelease and not self.include_prerelease:
            # prereleases must be opted into by a comparator on the same
            # core triple, or by an unconstrained group
            for comparator in group:
                if comparator.is_any or comparator.mentions_prerelease(version):
                    return True
            return False

        return True


    def satisfies(self, version: VersionLike) -> bool:
        """
        True if `version` satisfies at least one group of this range.
        """

        version = ensure_version(version)
        return any(self._test(group, version) for group in self.groups)


    def filter(self, versions: Iterable[VersionLike]) -> Iterator[Version]:
        """
        Yield the satisfying versions, in their original order.
        """

        for version in versions:
            version = ensure_version(version)
            if self.satisfies(version):
                yield version


    def __contains__(self, version: Any) -> bool:
        if isinstance(version, (str, Version)):
            return self.satisfies(version)
        return False


    def __str__(self) -> str:
        """
        Canonical comparator text. The include_prerelease option is not
        rendered; pass it again when re-parsing.
        """

        return " || ".join(" ".join(str(c) for c in group)
                           for group in self.groups)


    def __repr__(self) -> str:
        return f"Range({str(self)!r})"


    @classmethod
    def __get_pydantic_core_schema__(
            cls,
            _source_type: Any,
            _handler: Callable[[Any], core_schema.CoreSchema]) -> core_schema.CoreSchema:

        from_str_schema = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(_validate_range),
            ],
        )

        return core_schema.json_or_python_schema(
            json_schema=from_str_schema,
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(cls),
                    core_schema.no_info_plain_validator_function(_validate_range),
                ]
            ),
            serialization=core_schema.to_string_ser_schema(),
        )


    @classmethod
    def __get_pydantic_json_schema__(
            cls,
            _core_schema: core_schema.CoreSchema,
            handler: GetJsonSchemaHandler) -> JsonSchemaValue:

        return handler(core_schema.str_schema())


RangeLike: TypeAlias = Union[str, Range]


def ensure_range(value: RangeLike) -> Range:
    if isinstance(value, Range):
        return value
    return Range.parse(value)


def _validate_range(value: Any) -> Range:
    if isinstance(value, Range):
        return value
    if isinstance(value, str):
        return Range.parse(value)
    raise ValueError(f"Unsupported range value: {value!r}")


def parse_range(text: str, *, include_prerelease: bool = False) -> Range:
    """
    Parse a range expression, raising :class:`MalformedRange` on failure.
    """

    return Range.parse(text, include_prerelease=include_prerelease)


def must_parse_range(text: RangeLike) -> Range:
    """
    Convenience for literal constants and tests. Never use on untrusted
    input; invalid text aborts with :class:`MalformedRange`.
    """

    return ensure_range(text)


def satisfies(version: VersionLike, range_: RangeLike) -> bool:
    """
    One-shot check of a version against a range expression.
    """

    return ensure_range(range_).satisfies(version)


def max_satisfying(
        versions: Iterable[VersionLike],
        range_: RangeLike) -> Optional[Version]:
    """
    Return the highest version satisfying the range, or None.
    """

    best = None
    for version in ensure_range(range_).filter(versions):
        if best is None or version > best:
            best = version
    return best


def min_satisfying(
        versions: Iterable[VersionLike],
        range_: RangeLike) -> Optional[Version]:
    """
    Return the lowest version satisfying the range, or None.
    """

    best = None
    for version in ensure_range(range_).filter(versions):
        if best is None or version < best:
            best = version
    return best


# The end.
