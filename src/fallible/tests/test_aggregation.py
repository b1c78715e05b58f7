"""Tests for combine, traverse, collect_all and partition."""

from __future__ import annotations

from collections.abc import Iterator

from fallible import Result, collect_all, combine, failure, partition, success, traverse


def test_combine_all_success_preserves_order() -> None:
    assert combine([success(1), success(2), success(3)]) == success([1, 2, 3])


def test_combine_first_error_wins() -> None:
    assert combine([success(1), failure("A"), success(2), failure("B")]) == failure("A")


def test_combine_empty() -> None:
    assert combine([]) == success([])


def test_combine_returns_leftmost_failure_unchanged() -> None:
    err = {"code": "NOT_FOUND"}
    first = failure(err)

    combined = combine([success(1), first, failure({"code": "OTHER"})])

    assert combined.error is err


def test_combine_stops_consuming_at_first_failure() -> None:
    inspected: list[int] = []

    def results() -> Iterator[Result[int, str]]:
        for i in range(5):
            inspected.append(i)
            yield failure(f"e{i}") if i == 1 else success(i)

    assert combine(results()) == failure("e1")
    assert inspected == [0, 1]


def test_combine_accepts_any_iterable() -> None:
    assert combine(success(i) for i in range(3)) == success([0, 1, 2])
    assert combine((success("a"),)) == success(["a"])


def test_combine_result_is_fresh_list() -> None:
    inputs = [success(1)]
    combined = combine(inputs)
    combined.value.append(2)

    assert combine(inputs) == success([1])


def _parse(s: str) -> Result[int, str]:
    return success(int(s)) if s.isdigit() else failure(f"invalid: {s}")


def test_traverse() -> None:
    assert traverse(["1", "2", "3"], _parse) == success([1, 2, 3])
    assert traverse(["1", "bad", "3", "worse"], _parse) == failure("invalid: bad")
    assert traverse([], _parse) == success([])


def test_traverse_stops_calling_after_failure() -> None:
    seen: list[str] = []

    def parse(s: str) -> Result[int, str]:
        seen.append(s)
        return _parse(s)

    traverse(["1", "x", "2"], parse)

    assert seen == ["1", "x"]


def test_collect_all_accumulates_errors() -> None:
    assert collect_all([success(1), failure("e1"), success(3), failure("e2")]) == failure(["e1", "e2"])
    assert collect_all([success(1), success(2)]) == success([1, 2])
    assert collect_all([]) == success([])


def test_partition() -> None:
    values, errors = partition([success(1), failure("a"), success(2), failure("b")])

    assert values == [1, 2]
    assert errors == ["a", "b"]
