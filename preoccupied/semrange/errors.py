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
preoccupied.semrange.errors
Exception hierarchy for version, comparator, and range parsing failures.

All of these derive from :class:`ValueError`, so they surface naturally as
validation errors when used inside Pydantic models.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


__all__ = (
    "MalformedComparator",
    "MalformedRange",
    "MalformedVersion",
    "SemverError",
)


class SemverError(ValueError):
    """
    Base class for every parse failure raised by this package.
    """


class MalformedVersion(SemverError):
    """
    Text does not match the semantic version grammar.
    """

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid version: {text!r}")
        self.text = text


class MalformedComparator(SemverError):
    """
    Token does not match the operator-then-version comparator shape.
    """

    def __init__(self, token: str, reason: str = "") -> None:
        message = f"Invalid comparator: {token!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.token = token


class MalformedRange(SemverError):
    """
    A comparator within one of the range's OR-groups failed to parse.
    """

    def __init__(self, text: str, group: str, token: str) -> None:
        super().__init__(
            f"Invalid range {text!r}: bad comparator {token!r}"
            f" in group {group!r}")
        self.text = text
        self.group = group
        self.token = token


# The end.
