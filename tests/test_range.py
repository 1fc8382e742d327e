"""
tests.test_range
Unit tests for range parsing, satisfaction, and version selection.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import pytest

from preoccupied.semrange import (
    Comparator, MalformedComparator, MalformedRange, MalformedVersion,
    Range, Version, max_satisfying, min_satisfying, must_parse_range,
    parse_range, satisfies)


@pytest.mark.parametrize(
    "expr, version, expected",
    [
        (">1.0.0", "1.0.0", False),
        (">1.0.0", "2.0.0", True),
        (">1.0.0", "0.1.0", False),
        (">=1.0.0", "1.0.0", True),
        ("<1.0.0", "0.1.0", True),
        ("<=1.0.0", "1.1.0", False),
        ("=1.0.0", "1.0.0", True),
        ("1.2.3 - 1.2.4", "1.2.3", True),
        ("1.2.3 - 1.2.4", "1.2.4", True),
        ("1.2.3 - 1.2.4", "1.2.2", False),
        ("1.2.3 - 1.2.4", "1.2.5", False),
        ("^1.2.3", "1.8.1", True),
        ("^1.2.3", "2.0.0", False),
        ("^1.2.3", "1.2.2", False),
        ("^0.2.3", "0.2.9", True),
        ("^0.2.3", "0.3.0", False),
        ("^0.0.3", "0.0.3", True),
        ("^0.0.3", "0.0.4", False),
        ("~1.2.3", "1.2.9", True),
        ("~1.2.3", "1.3.0", False),
        ("~1", "1.9.9", True),
        ("1.2.x", "1.2.99", True),
        ("1.2.x", "1.3.0", False),
        ("1.x", "1.0.0", True),
        ("1.0.0 - 2.0.0", "1.2.3", True),
        (">=0.2.3 || <0.0.1", "0.0.0", True),
        (">=0.2.3 || <0.0.1", "0.2.4", True),
        (">=0.2.3 || <0.0.1", "0.1.0", False),
        (">1.2", "1.2.9", False),
        (">1.2", "1.3.0", True),
        ("<=1.x", "1.99.99", True),
        ("<=1.x", "2.0.0", False),
        (">x", "0.0.0", False),
        ("~ 1.2.3 || ^ 3", "3.4.5", True),
        (">=1.0.0 <1.0.0", "1.0.0", False),
    ])
def test_satisfies(expr, version, expected):
    """
    Shorthand ranges admit exactly the versions they describe.
    """

    r = Range.parse(expr)
    assert r.satisfies(version) is expected
    assert r.satisfies(Version.parse(version)) is expected
    assert satisfies(version, expr) is expected


@pytest.mark.parametrize("expr", ["", "   ", "*", "x", "* || 1.0.0"])
@pytest.mark.parametrize("version", ["0.0.0", "1.2.3", "99.0.0", "1.0.0-alpha"])
def test_unconstrained_ranges_match_everything(expr, version):
    """
    An empty or all-wildcard range is satisfied by every version.
    """

    assert Range.parse(expr).satisfies(version)


@pytest.mark.parametrize(
    "expr, version, expected",
    [
        pytest.param("^1.2.3-beta.2", "1.2.3-beta.4", True, id="same-core"),
        pytest.param("^1.2.3-beta.2", "1.2.4-beta.1", False, id="other-core"),
        pytest.param("^1.2.3-beta.2", "1.8.0", True, id="release"),
        pytest.param("^1.2.3", "1.3.0-beta", False, id="no-opt-in"),
        pytest.param("<2.0.0", "2.0.0-beta", False, id="below-bound"),
        pytest.param(">=1.0.0-rc.1 <2.0.0", "1.0.0-rc.2", True, id="lower-bound"),
        pytest.param(">=1.0.0-rc.1 <2.0.0", "1.5.0-rc.1", False, id="inside"),
        pytest.param("<=2.0.0-rc.1", "2.0.0-beta", True, id="upper-bound"),
        pytest.param("1.0.0-alpha", "1.0.0-alpha", True, id="exact"),
        pytest.param("~1.2.3-beta", "1.2.3-beta.1", True, id="tilde"),
        pytest.param("^1.0.0 || 2.0.0-rc.1", "2.0.0-rc.1", True, id="second-group"),
    ])
def test_prerelease_opt_in(expr, version, expected):
    """
    A prerelease only satisfies a group that names a prerelease on the
    same major.minor.patch.
    """

    assert Range.parse(expr).satisfies(version) is expected


@pytest.mark.parametrize(
    "expr, version",
    [
        ("^1.2.3", "1.3.0-beta"),
        ("<2.0.0", "2.0.0-beta"),
        (">=1.0.0-rc.1 <2.0.0", "1.5.0-rc.1"),
    ])
def test_include_prerelease(expr, version):
    """
    include_prerelease relies on precedence ordering alone.
    """

    assert not Range.parse(expr).satisfies(version)
    assert Range.parse(expr, include_prerelease=True).satisfies(version)
    assert parse_range(expr, include_prerelease=True).satisfies(version)


@pytest.mark.parametrize(
    "expr, expected",
    [
        ("^1.2.3", ">=1.2.3 <2.0.0"),
        ("", "*"),
        ("*", "*"),
        ("1.2.3 - 1.2.4 || 3.x", ">=1.2.3 <=1.2.4 || >=3.0.0 <4.0.0"),
        ("=1.2.3", "1.2.3"),
        ("> 1.0.0 || ", ">1.0.0 || *"),
        (">*", "<0.0.0"),
    ])
def test_str(expr, expected):
    """
    Ranges render as canonical comparator text.
    """

    r = Range.parse(expr)
    assert str(r) == expected
    assert repr(r) == f"Range({expected!r})"


@pytest.mark.parametrize(
    "expr",
    [
        "^1.2.3",
        "",
        "~0.1 || >=3.0.0-rc.1 <3.1.0",
        "1.2.3 - 2.x",
        ">=1.0.0+build <2",
    ])
@pytest.mark.parametrize("include_prerelease", [False, True])
def test_str_round_trip(expr, include_prerelease):
    """
    Re-parsing the rendered text with the same prerelease option yields
    an identical range.
    """

    r = Range.parse(expr, include_prerelease=include_prerelease)
    again = Range.parse(str(r), include_prerelease=r.include_prerelease)
    assert again == r
    assert str(again) == str(r)


def test_structure():
    """
    Groups hold parsed comparators in source order.
    """

    r = Range.parse("~1.2.3 || *")
    assert r.groups == (
        (Comparator.parse(">=1.2.3"), Comparator.parse("<1.3.0")),
        (Comparator.any(),),
    )
    assert r.raw == "~1.2.3 || *"


def test_str_omits_prerelease_option():
    """
    The rendered text does not carry include_prerelease, so re-parsing it
    alone gives the default behaviour.
    """

    r = Range.parse("^1.2.3", include_prerelease=True)
    plain = Range.parse(str(r))

    assert str(r) == str(Range.parse("^1.2.3"))
    assert plain != r
    assert r.satisfies("1.3.0-beta")
    assert not plain.satisfies("1.3.0-beta")


def test_equality_ignores_raw_text():
    """
    Ranges with the same comparators are equal whatever their spelling.
    """

    assert Range.parse("^1.2.3") == Range.parse(">=1.2.3 <2.0.0")
    assert hash(Range.parse("^1.2.3")) == hash(Range.parse(">=1.2.3 <2.0.0"))
    assert Range.parse("^1.2.3") != Range.parse("^1.2.3", include_prerelease=True)


@pytest.mark.parametrize(
    "expr, group, token",
    [
        pytest.param("abc", "abc", "abc", id="word"),
        pytest.param(">=1.2.3 foo", ">=1.2.3 foo", "foo", id="trailing-word"),
        pytest.param("1.2.3 - ", "1.2.3 -", "-", id="dangling-hyphen"),
        pytest.param(">=1.0.0 || bar", "bar", "bar", id="second-group"),
        pytest.param(">", ">", ">", id="bare-operator"),
        pytest.param("~1.2.3.4", "~1.2.3.4", "~1.2.3.4", id="extra-segment"),
        pytest.param("1.2.3-01", "1.2.3-01", "1.2.3-01", id="leading-zero"),
        pytest.param("^1\u0663.0.0", "^1\u0663.0.0", "^1\u0663.0.0", id="non-ascii-digit"),
    ])
def test_parse_rejects_malformed(expr, group, token):
    """
    A bad comparator anywhere fails the whole range, naming the token and
    group, and chaining the comparator failure.
    """

    with pytest.raises(MalformedRange) as error:
        Range.parse(expr)

    assert error.value.text == expr
    assert error.value.group == group
    assert error.value.token == token
    assert isinstance(error.value.__cause__, MalformedComparator)
    assert token in str(error.value)


def test_parse_rejects_non_strings():
    """
    Only strings can be parsed as ranges.
    """

    with pytest.raises(TypeError):
        Range.parse(None)


def test_malformed_candidate():
    """
    Checking an unparsable version raises rather than answering.
    """

    with pytest.raises(MalformedVersion):
        Range.parse("^1.0.0").satisfies("1.0")


def test_contains():
    """
    The in operator checks satisfaction for versions and strings.
    """

    r = Range.parse("^1.0.0")
    assert "1.5.0" in r
    assert Version.parse("1.5.0") in r
    assert "2.0.0" not in r
    assert 42 not in r


@pytest.fixture
def candidates():
    """
    Provide an unordered set of candidate versions.
    """

    return ["1.2.4", "2.0.0", "1.2.3", "1.5.0-beta", "1.4.2", "0.9.0"]


def test_filter(candidates):
    """
    filter() yields satisfying versions in input order.
    """

    r = Range.parse("^1.2")
    assert list(r.filter(candidates)) == [
        Version.parse("1.2.4"),
        Version.parse("1.2.3"),
        Version.parse("1.4.2"),
    ]


@pytest.mark.parametrize(
    "expr, highest, lowest",
    [
        ("^1.2", "1.4.2", "1.2.3"),
        ("*", "2.0.0", "0.9.0"),
        ("<1.0.0 || >=2", "2.0.0", "0.9.0"),
        ("^3", None, None),
    ])
def test_max_and_min_satisfying(candidates, expr, highest, lowest):
    """
    The newest and oldest satisfying versions are selected.
    """

    expected_high = Version.parse(highest) if highest else None
    expected_low = Version.parse(lowest) if lowest else None

    assert max_satisfying(candidates, expr) == expected_high
    assert min_satisfying(candidates, Range.parse(expr)) == expected_low


def test_must_parse_range():
    """
    The convenience tier passes ranges through and still rejects garbage.
    """

    r = Range.parse("1.x")
    assert must_parse_range(r) is r
    assert must_parse_range("1.x") == r

    with pytest.raises(MalformedRange):
        must_parse_range("nope")


# The end.
