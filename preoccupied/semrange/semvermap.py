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
preoccupied.semrange.semvermap
Version-aware mapping of semantic versions to values with policy-driven selection.

Use the :class:`SemverMap` class to create a mapping of semantic versions to
values. Selectors are either a single version or any range expression
understood by :class:`Range`.

Example:

```python
mapping = SemverMap()
mapping.set("1.0.0", "alpha")
mapping.set("1.2.0", "bravo")
mapping.set("2.0.0", "charlie")

result = mapping.get("1.2.0")
assert result == "bravo"

result = mapping.get("1.1.5", policy="nearest_le")
assert result == "alpha"

result = mapping.get("^1.0.0")
assert result == "bravo"
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import (Dict, Generic, Iterator, List, Mapping, Optional,
                    Protocol, Sequence, Tuple, TypeVar, Union)

from .errors import MalformedVersion
from .range import Range
from .version import Version, VersionLike, ensure_version


__all__ = (
    "ResolutionPolicy",
    "ResolveVersionExact",
    "ResolveVersionGE",
    "ResolveVersionLE",
    "SemverMap",
    "lookup_policy",
)


class _Sentinel:
    """
    Internal sentinel marker for unset defaults.
    """


_MISSING = _Sentinel()


def _single_version(selector: str) -> Optional[Version]:
    """
    Return the selector as a concrete version, or None if it should be
    treated as a range expression.
    """

    try:
        version = Version.parse(selector)
    except MalformedVersion:
        return None
    return None if version.wildcard else version


class ResolutionPolicy(Protocol):
    """
    Protocol describing resolution behaviour for semantic-version selectors.
    """

    def resolve(
            self,
            selector: str,
            available: Sequence[Version]) -> Optional[Version]:
        """
        Return the selected version given a selector and available keys.

        :param selector: The selector to resolve.
        :param available: The available versions, in ascending order.
        :return: The selected version, or None.
        """

        ...


class ResolveVersionLE(ResolutionPolicy):
    """
    Resolve selectors toward the greatest available version not exceeding the request.
    """

    def resolve(
            self,
            selector: str,
            available: Sequence[Version]) -> Optional[Version]:
        """
        Return the highest version that satisfies the selector while remaining
        less than or equal to the requested version.

        A single version is treated as an ``<=`` bound. Anything else is
        parsed as a range, and the highest satisfying version wins.
        """

        version = _single_version(selector)
        if version is not None:
            for candidate in reversed(available):
                if candidate <= version:
                    return candidate
            return None

        matcher = Range.parse(selector)
        for candidate in reversed(available):
            if matcher.satisfies(candidate):
                return candidate
        return None


class ResolveVersionGE(ResolutionPolicy):
    """
    Resolve selectors toward the smallest available version not less than the request.
    """

    def resolve(
            self,
            selector: str,
            available: Sequence[Version]) -> Optional[Version]:
        """
        Return the lowest version that satisfies the selector while remaining
        greater than or equal to the requested version.

        A single version is treated as a ``>=`` bound. Anything else is
        parsed as a range, and the lowest satisfying version wins.
        """

        version = _single_version(selector)
        if version is not None:
            for candidate in available:
                if candidate >= version:
                    return candidate
            return None

        matcher = Range.parse(selector)
        for candidate in available:
            if matcher.satisfies(candidate):
                return candidate
        return None


class ResolveVersionExact(ResolutionPolicy):
    """
    Resolve selectors that demand exact matches or bounded ranges.
    """

    def resolve(
            self,
            selector: str,
            available: Sequence[Version]) -> Optional[Version]:
        """
        Return the version equal to a single-version selector, or the
        highest version satisfying a range selector.
        """

        version = _single_version(selector)
        if version is not None:
            for candidate in available:
                if candidate == version:
                    return candidate
            return None

        matcher = Range.parse(selector)
        for candidate in reversed(available):
            if matcher.satisfies(candidate):
                return candidate
        return None


def lookup_policy(policy: Union[str, ResolutionPolicy, None]) -> Optional[ResolutionPolicy]:
    if policy is None or isinstance(policy, str):
        if policy in ("nearest_le", "le"):
            return ResolveVersionLE()
        elif policy in ("nearest_ge", "ge"):
            return ResolveVersionGE()
        elif policy in ("exact", "eq"):
            return ResolveVersionExact()
        else:
            return None
    return policy


V = TypeVar("V")


class SemverMap(Generic[V]):
    """
    Mapping that stores versioned values and resolves selectors via policies.
    """

    def __init__(
            self,
            *,
            default_policy: Union[str, ResolutionPolicy, None] = None) -> None:

        if default_policy is None:
            self._default_policy: ResolutionPolicy = ResolveVersionExact()
        else:
            self._default_policy = self.resolver(default_policy)

        # map of Version to value
        self._entries: Dict[Version, V] = {}

        # sorted list of Versions from _entries.keys()
        self._versions: List[Version] = []

        # cache of selector str to Version, bypassing the resolver
        self._cache: Dict[str, Optional[Version]] = {}


    def resolver(
            self,
            policy: Union[str, ResolutionPolicy, None] = None) -> ResolutionPolicy:
        """
        Return the resolver for the given policy.
        """

        if policy is None:
            return self._default_policy

        found = lookup_policy(policy)
        if found is None:
            raise ValueError(f"Invalid policy: {policy}")
        return found


    def _resolve(
            self,
            selector: Optional[str],
            policy: Union[str, ResolutionPolicy, None] = None) -> Optional[Version]:

        if selector is None:
            selector = ""

        if policy is not None:
            # when a policy is provided, we bypass the cache
            return self.resolver(policy).resolve(selector, self._versions)

        if selector in self._cache:
            return self._cache[selector]

        version = self._default_policy.resolve(selector, self._versions)
        self._cache[selector] = version
        return version


    def set(self, version: VersionLike, value: V) -> None:
        """
        Associate `value` with `version`.
        """

        version = ensure_version(version)
        if version.wildcard:
            raise ValueError("Cannot store a value under the wildcard version")

        if version in self._entries:
            self._entries[version] = value

        else:
            # adding a new version means we need to clear the cache and re-sort the
            # versions list
            self._cache.clear()
            self._entries[version] = value
            self._versions = sorted(self._entries.keys())


    def delete(self, version: VersionLike) -> None:
        """
        Remove the value stored under exactly `version`.
        """

        version = ensure_version(version)
        if version not in self._entries:
            raise KeyError(version)

        self._cache.clear()
        del self._entries[version]
        self._versions.remove(version)


    def get(self,
            selector: Optional[str] = None,
            default: Union[V, _Sentinel] = _MISSING,
            *,
            policy: Union[str, ResolutionPolicy, None] = None) -> V:
        """
        Retrieve the value for `selector` using the provided `policy`. Selector
        may be a string representing a version (eg. "1.0.0") or a range (eg.
        ">=1.0.0 <2.0.0", "^1.2", "1.x || 3.x"). If no selector is provided,
        every version is a candidate. If the selector is not found, the
        default value will be returned. If the default value is not
        provided, a ValueError will be raised.

        :param selector: The selector to retrieve the value for.
        :param policy: The policy to use to resolve the selector.
        :param default: The default value to return if the selector is not found.
        :return: The value for the selector.
        """

        version = self._resolve(selector, policy)

        if version is None or version not in self._entries:
            if default is _MISSING:
                raise ValueError(f"No version matching {selector}")
            return default
        return self._entries[version]


    def __getitem__(self, selector: str) -> V:
        """
        Return the value for the given selector.
        """

        return self.get(selector)


    def __setitem__(self, version: VersionLike, value: V) -> None:
        """
        Set the value for the given version.
        """

        self.set(version, value)


    def __delitem__(self, version: VersionLike) -> None:
        """
        Delete the value for the given version.
        """

        self.delete(version)


    def __contains__(self, selector: Union[str, Version]) -> bool:
        """
        Return True if the given selector resolves to a stored version.
        """

        if isinstance(selector, str):
            return self._resolve(selector) is not None

        elif isinstance(selector, Version):
            return selector in self._entries

        return False


    def __len__(self) -> int:
        return len(self._entries)


    def __iter__(self) -> Iterator[Version]:
        return iter(self._versions)


    def items(self) -> Iterator[Tuple[Version, V]]:
        """
        Return an iterator over the stored versions and values in ascending semantic order.
        """

        return ((version, self._entries[version]) for version in self._versions)


    def values(self) -> Iterator[V]:
        """
        Return an iterator over the stored values in ascending semantic order.
        """

        return (self._entries[version] for version in self._versions)


    def versions(self) -> Iterator[Version]:
        """
        Return an iterator over the stored versions in ascending semantic order.
        """

        return iter(self._versions)


    def earliest(self) -> Optional[Version]:
        """
        Return the earliest (lowest) stored version.
        """

        return self._versions[0] if self._versions else None


    def latest(self) -> Optional[Version]:
        """
        Return the latest (highest) stored version.
        """

        return self._versions[-1] if self._versions else None


    def update(self, other: Mapping[VersionLike, V]) -> None:
        """
        Update the map with the values from another map.
        """

        for version, value in other.items():
            self.set(version, value)


# The end.
