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
preoccupied.semrange
Namespace package segment providing semantic version parsing, ordering, and
range matching with caret, tilde, hyphen, and X-range shorthand.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from .comparator import Comparator, Operator
from .errors import MalformedComparator, MalformedRange, MalformedVersion, SemverError
from .normalize import normalize
from .range import (
    Range, RangeLike, ensure_range, max_satisfying, min_satisfying,
    must_parse_range, parse_range, satisfies)
from .semvermap import SemverMap, lookup_policy
from .version import (
    Version, VersionLike, compare, ensure_version, must_parse_version,
    parse_version, sort_versions)


__all__ = (
    "Version",
    "VersionLike",
    "compare",
    "ensure_version",
    "must_parse_version",
    "parse_version",
    "sort_versions",

    "Comparator",
    "Operator",

    "normalize",

    "Range",
    "RangeLike",
    "ensure_range",
    "max_satisfying",
    "min_satisfying",
    "must_parse_range",
    "parse_range",
    "satisfies",

    "SemverMap",
    "lookup_policy",

    "MalformedComparator",
    "MalformedRange",
    "MalformedVersion",
    "SemverError",
)


# The end.
