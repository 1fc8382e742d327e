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
preoccupied.semrange.comparator
Single relational constraints against one version, the atoms of a range.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict

from .errors import MalformedComparator, MalformedVersion
from .version import FULL_PLAIN, Version, VersionLike, ensure_version


__all__ = (
    "Comparator",
    "Operator",
)


GTLT = r"((?:<|>)?=?)"

_COMPARATOR = re.compile(rf"^{GTLT}\s*({FULL_PLAIN}|\*)$|^$")


class Operator(Enum):
    """
    Relational operators. ``ANY`` matches every version.
    """

    EQ = "="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    ANY = "*"


    @property
    def symbol(self) -> str:
        """
        The prefix used when rendering a comparator. Equality is implicit.
        """

        if self is Operator.EQ or self is Operator.ANY:
            return ""
        return self.value


_SYMBOLS: Dict[str, Operator] = {
    "": Operator.EQ,
    "=": Operator.EQ,
    ">": Operator.GT,
    ">=": Operator.GE,
    "<": Operator.LT,
    "<=": Operator.LE,
}


_DISPATCH: Dict[Operator, Callable[[Version, Version], bool]] = {
    Operator.EQ: Version.eq,
    Operator.GT: Version.gt,
    Operator.GE: Version.gte,
    Operator.LT: Version.lt,
    Operator.LE: Version.lte,
}


@dataclass(frozen=True)
class Comparator:
    """
    An operator bound to a version, eg. ``>=1.2.3``. A comparator bound
    to the wildcard version is satisfied by everything regardless of its
    operator.
    """

    operator: Operator
    version: Version = field(default_factory=lambda: Version(wildcard=True))


    @classmethod
    def any(cls) -> "Comparator":
        return cls(Operator.ANY)


    @classmethod
    def parse(cls, token: str) -> "Comparator":
        """
        Parse a single comparator token such as ``">=1.2.3"``, ``"1.0.0"``,
        ``"*"``, or the empty string.

        :raises MalformedComparator: if the token is not an optional
          operator followed by a full version
        """

        token = token.strip()
        found = _COMPARATOR.match(token)
        if found is None:
            raise MalformedComparator(token)

        symbol = found.group(1) or ""
        text = found.group(2) or ""

        if text in ("", "*"):
            return cls.any()

        try:
            version = Version.parse(text)
        except MalformedVersion as err:
            raise MalformedComparator(token, str(err)) from err

        return cls(_SYMBOLS[symbol], version)


    @property
    def is_any(self) -> bool:
        return self.operator is Operator.ANY or self.version.wildcard


    def satisfies(self, version: VersionLike) -> bool:
        """
        True if `version` meets this constraint.
        """

        if self.is_any:
            return True

        candidate = ensure_version(version)
        return _DISPATCH[self.operator](candidate, self.version)


    def mentions_prerelease(self, version: Version) -> bool:
        """
        True if this comparator names a prerelease on the same
        major.minor.patch as `version`.
        """

        if self.is_any:
            return False
        return self.version.is_prerelease and self.version.core == version.core


    def __str__(self) -> str:
        if self.is_any:
            return "*"
        return self.operator.symbol + self.version.format()


    def __repr__(self) -> str:
        return f"Comparator({str(self)!r})"


# The end.
