"""Tests for the free-function combinator forms."""

from __future__ import annotations

from functools import partial

import pytest

from fallible import Result, combinators as rc, failure, success


def test_map() -> None:
    assert rc.map(success(2), lambda x: x + 1) == success(3)
    assert rc.map(failure("e"), lambda x: x + 1) == failure("e")


def test_map_identity_law() -> None:
    for r in (success(1), failure("e")):
        assert rc.map(r, lambda x: x) == r


def test_map_composition_law() -> None:
    f = lambda x: x + 1
    g = lambda x: x * 3
    for r in (success(1), failure("e")):
        assert rc.map(rc.map(r, f), g) == rc.map(r, lambda x: g(f(x)))


def test_map_error() -> None:
    assert rc.map_error(failure("e"), str.upper) == failure("E")
    assert rc.map_error(success("v"), str.upper) == success("v")


def test_bimap() -> None:
    assert rc.bimap(success(1), str, len) == success("1")
    assert rc.bimap(failure("abc"), str, len) == failure(3)


def test_and_then_short_circuit_with_counting_stub() -> None:
    calls = 0

    def stub(x: int) -> Result[int, str]:
        nonlocal calls
        calls += 1
        return success(x)

    assert rc.and_then(failure("e"), stub) == failure("e")
    assert calls == 0
    assert rc.and_then(success(1), stub) == success(1)
    assert calls == 1


def test_and_then_associativity() -> None:
    f = lambda x: success(x + 1) if x < 10 else failure("too big")
    g = lambda x: success(x * 2)
    for r in (success(1), success(10), failure("e")):
        assert rc.and_then(rc.and_then(r, f), g) == rc.and_then(r, lambda v: rc.and_then(f(v), g))


def test_or_else() -> None:
    assert rc.or_else(failure("e"), lambda e: success(len(e))) == success(1)
    assert rc.or_else(success(5), lambda e: success(0)) == success(5)


@pytest.mark.parametrize(("result", "expected"), [(success(5), 5), (failure("x"), 0)])
def test_get_or_else(result: Result[int, str], expected: int) -> None:
    assert rc.get_or_else(result, 0) == expected


def test_get_or_else_get() -> None:
    assert rc.get_or_else_get(failure("abc"), len) == 3
    assert rc.get_or_else_get(success(7), len) == 7


def test_match() -> None:
    assert rc.match(success(2), success=lambda v: v * 10, failure=lambda e: -1) == 20
    assert rc.match(failure("e"), success=lambda v: v * 10, failure=lambda e: -1) == -1


def test_flatten() -> None:
    assert rc.flatten(success(success(1))) == success(1)


def test_usable_with_partial() -> None:
    double_all = partial(rc.map, fn=lambda x: x * 2)
    assert [double_all(r) for r in (success(1), failure("e"))] == [success(2), failure("e")]


def test_compose() -> None:
    parse = lambda s: success(int(s)) if s.isdigit() else failure(f"nan: {s}")
    positive = lambda n: success(n) if n > 0 else failure("not positive")
    pipeline = rc.compose(parse, positive)

    assert pipeline("7") == success(7)
    assert pipeline("x") == failure("nan: x")
    assert pipeline("0") == failure("not positive")
    assert rc.compose()("anything") == success("anything")
