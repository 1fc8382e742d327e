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
preoccupied.semrange.version
Semantic version values built on python-semver, plus the wildcard version
and the grammar fragments shared by the range parser.

Example:

```python
v = Version.parse("v1.2.3-beta.2+build.7")
assert v.prerelease == "beta.2"
assert v < Version.parse("1.2.3")
assert str(v) == "1.2.3-beta.2+build.7"
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from semver import Version as SemVersion

from pydantic import GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import TypeAlias

from .errors import MalformedVersion


__all__ = (
    "Version",
    "VersionLike",
    "compare",
    "ensure_version",
    "must_parse_version",
    "parse_version",
    "sort_versions",
)


# Grammar fragments for the comparator and the range normalizer, which
# assemble larger patterns out of them. Digits are ASCII only.

NUMERIC_IDENTIFIER = r"0|[1-9][0-9]*"
NON_NUMERIC_IDENTIFIER = r"[0-9]*[a-zA-Z-][a-zA-Z0-9-]*"
BUILD_IDENTIFIER = r"[0-9A-Za-z-]+"

MAIN_VERSION = (
    rf"({NUMERIC_IDENTIFIER})\."
    rf"({NUMERIC_IDENTIFIER})\."
    rf"({NUMERIC_IDENTIFIER})")

PRERELEASE_IDENTIFIER = rf"(?:{NUMERIC_IDENTIFIER}|{NON_NUMERIC_IDENTIFIER})"
PRERELEASE = rf"(?:-({PRERELEASE_IDENTIFIER}(?:\.{PRERELEASE_IDENTIFIER})*))"
BUILD = rf"(?:\+({BUILD_IDENTIFIER}(?:\.{BUILD_IDENTIFIER})*))"

FULL_PLAIN = rf"v?{MAIN_VERSION}{PRERELEASE}?{BUILD}?"

WILDCARDS = ("", "*", "x", "X")


class Version(SemVersion):
    """
    Pydantic-compatible semantic version. Build metadata is carried for
    serialization but ignored by equality, hashing, and ordering.

    A wildcard version (parsed from an empty string, ``*``, ``x`` or
    ``X``) represents the absence of a constraint and renders as ``*``.
    It is equal only to another wildcard, and has no precedence relative
    to concrete versions: ordering the two raises ``ValueError``.
    """

    __slots__ = ("_wildcard",)


    def __init__(
            self,
            major: int = 0,
            minor: int = 0,
            patch: int = 0,
            prerelease: Optional[str] = None,
            build: Optional[str] = None,
            *,
            wildcard: bool = False) -> None:

        super().__init__(major, minor, patch, prerelease, build)
        self._wildcard = wildcard


    @classmethod
    def parse(cls, text: str) -> "Version":
        """
        Parse a version string. Surrounding whitespace and a single
        leading ``v`` are discarded.

        :param text: The version string, eg. ``"1.2.3"`` or ``"v1.0.0-rc.1"``
        :raises MalformedVersion: if the text is not a semantic version
        :return: The parsed version
        """

        if not isinstance(text, str):
            raise TypeError(f"Unsupported version value: {text!r}")

        stripped = text.strip()
        if stripped in WILDCARDS:
            return cls(wildcard=True)

        # the semver grammar would otherwise accept any Unicode digit
        if not stripped.isascii():
            raise MalformedVersion(text)

        if stripped.startswith("v"):
            stripped = stripped[1:]

        try:
            return super().parse(stripped)
        except ValueError as err:
            raise MalformedVersion(text) from err


    @classmethod
    def from_semver(cls, value: SemVersion) -> "Version":
        """
        Convert a plain ``semver.Version``.
        """

        return cls(*value.to_tuple())


    def to_semver(self) -> SemVersion:
        """
        Convert into a plain ``semver.Version``. The wildcard version has
        no equivalent there.
        """

        if self._wildcard:
            raise ValueError("The wildcard version cannot be converted")
        return SemVersion(*self.to_tuple())


    @property
    def wildcard(self) -> bool:
        return self._wildcard


    @property
    def core(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)


    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)


    def format(self) -> str:
        """
        Render the canonical text form, the inverse of :meth:`parse`.
        """

        if self._wildcard:
            return "*"
        return super().__str__()


    def compare(self, other: "VersionLike") -> int:
        """
        Three-way comparison against another version.

        :raises ValueError: if exactly one side is the wildcard
        :return: -1, 0, or 1
        """

        other = ensure_version(other)
        if self._wildcard or other.wildcard:
            if self._wildcard and other.wildcard:
                return 0
            raise ValueError("The wildcard version has no precedence")
        return super().compare(other)


    def lt(self, other: "VersionLike") -> bool:
        return self.compare(other) < 0


    def lte(self, other: "VersionLike") -> bool:
        return self.compare(other) <= 0


    def gt(self, other: "VersionLike") -> bool:
        return self.compare(other) > 0


    def gte(self, other: "VersionLike") -> bool:
        return self.compare(other) >= 0


    def eq(self, other: "VersionLike") -> bool:
        return self.compare(other) == 0


    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (str, SemVersion)):
            other = ensure_version(other)
        if not isinstance(other, Version):
            return NotImplemented
        if self._wildcard or other.wildcard:
            return self._wildcard == other.wildcard
        return self.compare(other) == 0


    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result


    def __hash__(self) -> int:
        return hash((self._wildcard, self.to_tuple()[:4]))


    def __str__(self) -> str:
        return self.format()


    def __repr__(self) -> str:
        return f"Version({self.format()!r})"


    @classmethod
    def __get_pydantic_core_schema__(
            cls,
            _source_type: Any,
            _handler: Callable[[Any], core_schema.CoreSchema]) -> core_schema.CoreSchema:

        from_str_schema = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(_validate_version),
            ],
        )

        return core_schema.json_or_python_schema(
            json_schema=from_str_schema,
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(cls),
                    core_schema.no_info_plain_validator_function(_validate_version),
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


VersionLike: TypeAlias = Union[str, Version, SemVersion]


def ensure_version(value: VersionLike) -> Version:
    """
    Return `value` as a Version, parsing strings and converting plain
    ``semver.Version`` instances.
    """

    if isinstance(value, Version):
        return value
    if isinstance(value, SemVersion):
        return Version.from_semver(value)
    return Version.parse(value)


def _validate_version(value: Any) -> Version:
    """
    Pydantic validator hook. Anything unsupported is reported as a
    ValueError so it becomes a validation error rather than escaping.
    """

    if isinstance(value, (str, SemVersion)):
        return ensure_version(value)
    raise ValueError(f"Unsupported version value: {value!r}")


def parse_version(text: str) -> Version:
    """
    Parse a version string, raising :class:`MalformedVersion` on failure.
    """

    return Version.parse(text)


def must_parse_version(text: VersionLike) -> Version:
    """
    Convenience for literal constants and tests. Never use on untrusted
    input; invalid text aborts with :class:`MalformedVersion`.
    """

    return ensure_version(text)


def compare(a: VersionLike, b: VersionLike) -> int:
    """
    Three-way comparison of two versions (or version strings).

    :return: -1 if a < b, 0 if equal in precedence, 1 if a > b
    """

    return ensure_version(a).compare(b)


def sort_versions(
        versions: Iterable[VersionLike],
        reverse: bool = False) -> List[Version]:
    """
    Return a new list of the given versions in ascending precedence
    order (descending if `reverse`). The sort is stable, so versions that
    differ only in build metadata keep their input order. The wildcard
    version cannot be sorted among concrete versions.
    """

    return sorted((ensure_version(v) for v in versions), reverse=reverse)


# The end.
