import dataclasses

import pytest

from tabquery.query.constraints import ColumnPredicate
from tabquery.query.exceptions import InvalidArgument
from tabquery.query.query import QuerySpec
from tabquery.sources.list_source import ListSource


def ids(result):
    return [r["id"] for r in result.to_list()]


def test_empty_spec_is_identity(people):
    result = QuerySpec().apply(people)
    assert result.header() == people.header()
    assert result.to_list() == list(people)
    assert result.keys() == [0, 1, 2, 3, 4]


def test_end_to_end_filter_sort_limit():
    source = ListSource([["3"], ["2"], ["1"]], header=["n"])
    spec = QuerySpec().and_where("n", "!=", "2").order_by_asc("n", int).limit(1)
    assert spec.apply(source).to_list() == [{"n": "1"}]


def test_pipeline_order_is_filter_sort_window_select(people):
    spec = (QuerySpec()
            .and_where("age", ">=", "25")
            .order_by_desc("age")
            .offset(1)
            .limit(2)
            .select("name"))
    result = spec.apply(people)
    # desc po godinama: Ema 41, Ana 30, Ceca 27, Boris 25, Dejan 25
    assert result.to_list() == [{"name": "Ana"}, {"name": "Ceca"}]
    assert result.keys() == [0, 2]
    assert result.header() == ["name"]


def test_and_where_is_idempotent(people):
    once = QuerySpec().and_where("city", "=", "Beograd")
    twice = once.and_where("city", "=", "Beograd")
    assert ids(once.apply(people)) == ids(twice.apply(people)) == ["1", "3"]


def test_where_not_complements(people):
    spec = QuerySpec().where_not("city", "=", "Beograd")
    assert ids(spec.apply(people)) == ["2", "4", "5"]


def test_where_not_is_set_difference(people):
    base = QuerySpec().and_where("age", ">=", "27")
    removed = QuerySpec().and_where("age", ">=", "27").and_where("city", "=", "Beograd")
    narrowed = base.where_not("city", "=", "Beograd")

    expected = [i for i in ids(base.apply(people)) if i not in ids(removed.apply(people))]
    assert ids(narrowed.apply(people)) == expected == ["5"]


def test_or_and_xor_fold_over_previous_expression(people):
    either = QuerySpec().and_where("city", "=", "Niš").or_where("age", ">", "40")
    assert ids(either.apply(people)) == ["4", "5"]

    only_one = QuerySpec().and_where("city", "=", "Beograd").xor_where("age", "=", "30")
    assert ids(only_one.apply(people)) == ["3"]


def test_where_accepts_one_and_two_argument_callables(people):
    by_record = QuerySpec().where(lambda r: r["city"] == "Novi Sad")
    by_index = QuerySpec().where(lambda r, i: i % 2 == 0)
    assert ids(by_record.apply(people)) == ["2", "5"]
    assert ids(by_index.apply(people)) == ["1", "3", "5"]


def test_column_to_column_condition():
    source = ListSource([["1", "1"], ["2", "3"], ["5", "4"]], header=["a", "b"])
    result = QuerySpec().and_where_column("a", "<", "b").apply(source)
    assert result.to_list() == [{"a": "2", "b": "3"}]
    assert result.keys() == [1]

    result = QuerySpec().where_not_column("a", "=", "b").apply(source)
    assert result.keys() == [1, 2]


def test_specs_are_immutable():
    base = QuerySpec()
    limited = base.limit(2)
    filtered = base.and_where("a", "=", "1")
    assert base.limit_value == -1 and limited.limit_value == 2
    assert base.conditions == () and len(filtered.conditions) == 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        base.limit_value = 3


def test_unchanged_values_return_same_instance():
    spec = QuerySpec().select("a").offset(2).limit(3)
    assert spec.select("a") is spec
    assert spec.offset(2) is spec
    assert spec.limit(3) is spec


def test_bad_offset_and_limit_leave_receiver_unchanged():
    spec = QuerySpec().offset(1).limit(5)
    with pytest.raises(InvalidArgument):
        spec.offset(-1)
    with pytest.raises(InvalidArgument):
        spec.limit(-2)
    assert (spec.offset_value, spec.limit_value) == (1, 5)


def test_limit_zero_gives_empty_result(people):
    assert QuerySpec().limit(0).apply(people).to_list() == []
    assert QuerySpec().offset(10).apply(people).exists() is False


def test_order_by_requires_callable():
    with pytest.raises(InvalidArgument):
        QuerySpec().order_by("age")


def test_unknown_select_column_fails_on_apply(people):
    with pytest.raises(InvalidArgument):
        QuerySpec().select("salary").apply(people)


def test_unknown_predicate_column_fails_when_read(people):
    result = QuerySpec().and_where("salary", ">", "1").apply(people)
    with pytest.raises(InvalidArgument):
        result.to_list()


def test_header_override(make_rows):
    source = make_rows(["1", "Ana"], ["2", "Boris"])
    result = QuerySpec().and_where("name", "=", "Boris").apply(source, header=["id", "name"])
    assert result.to_list() == [{"id": "2", "name": "Boris"}]


def test_positional_columns_without_header(make_rows):
    source = make_rows(["1", "Ana"], ["2", "Boris"], ["3", "Ceca"])
    result = QuerySpec().and_where(1, "!=", "Ana").select(0).apply(source)
    assert result.header() == []
    assert result.to_list() == [{0: "2"}, {0: "3"}]


def test_create_factory(people):
    spec = QuerySpec.create(where=lambda r: r["city"] == "Beograd", offset=1)
    assert ids(spec.apply(people)) == ["3"]
    assert QuerySpec.create(limit=2).limit_value == 2


def test_result_can_be_queried_again(people):
    adults = QuerySpec().and_where("age", ">", "26").select("name", "age").apply(people)
    assert adults.count() == 3

    oldest = QuerySpec().order_by_desc("age").limit(1).apply(adults)
    assert oldest.to_list() == [{"name": "Ema", "age": "41"}]
    # prvi rezultat je i dalje čitljiv
    assert [r["name"] for r in adults] == ["Ana", "Ceca", "Ema"]


def test_same_spec_applied_twice(people):
    spec = QuerySpec().and_where("city", "=", "Novi Sad")
    assert ids(spec.apply(people)) == ids(spec.apply(people)) == ["2", "5"]


def test_or_and_xor_as_first_condition_are_stored_as_is(people):
    first_or = QuerySpec().or_where("city", "=", "Niš")
    first_xor = QuerySpec().xor_where("city", "=", "Niš")
    for spec in (first_or, first_xor):
        assert len(spec.conditions) == 1
        assert isinstance(spec.conditions[0], ColumnPredicate)
        assert ids(spec.apply(people)) == ["4"]


def test_xor_chain_on_spec_is_pairwise(people):
    # Novi Sad redovi zadovoljavaju sva tri uslova: (T xor T) xor T == T
    spec = (QuerySpec()
            .and_where("city", "=", "Novi Sad")
            .xor_where("age", ">=", "25")
            .xor_where("id", ">=", "1"))
    assert ids(spec.apply(people)) == ["2", "5"]


def test_where_not_position_changes_result(people):
    not_last = (QuerySpec()
                .and_where("city", "=", "Beograd")
                .or_where("age", "=", "25")
                .where_not("name", "=", "Dejan"))
    not_middle = (QuerySpec()
                  .and_where("city", "=", "Beograd")
                  .where_not("name", "=", "Dejan")
                  .or_where("age", "=", "25"))
    assert ids(not_last.apply(people)) == ["1", "2", "3"]
    assert ids(not_middle.apply(people)) == ["1", "2", "3", "4"]


def test_or_and_xor_column_conditions():
    source = ListSource([["1", "1"], ["2", "3"], ["5", "4"]], header=["a", "b"])

    either = QuerySpec().and_where_column("a", "=", "b").or_where_column("a", ">", "b")
    assert either.apply(source).keys() == [0, 2]

    only_one = QuerySpec().and_where_column("a", "<=", "b").xor_where_column("a", "=", "b")
    assert only_one.apply(source).keys() == [1]

    first = QuerySpec().xor_where_column("a", ">", "b")
    assert first.apply(source).keys() == [2]


def test_callable_conditions_fold_into_following_helper(people):
    spec = (QuerySpec()
            .where(lambda r: r["city"] != "Niš")
            .where(lambda r, i: i < 4))
    assert len(spec.conditions) == 2
    assert ids(spec.apply(people)) == ["1", "2", "3"]

    folded = spec.or_where("age", ">", "40")
    assert len(folded.conditions) == 1
    assert ids(folded.apply(people)) == ["1", "2", "3", "5"]

    narrowed = spec.and_where("age", "<", "30")
    assert ids(narrowed.apply(people)) == ["2", "3"]
