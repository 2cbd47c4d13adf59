"""
Unit tests for the predicate classes.
"""

import pytest

from query_hub.sql.predicates import (
    CONDITION_KINDS,
    Group,
    Having,
    Join,
    JoinKind,
    Limit,
    Offset,
    Or,
    Order,
    PredicateKind,
    Where,
    WhereIn,
    WhereNotIn,
    inner_join,
    left_join,
    natural_join,
    outer_join,
    right_join,
)


@pytest.mark.unit
class TestFragments:
    """Where/Group/Having/Order keep the caller's fragment verbatim."""

    @pytest.mark.parametrize(
        "cls, kind",
        [
            (Where, PredicateKind.WHERE),
            (Group, PredicateKind.GROUP),
            (Having, PredicateKind.HAVING),
            (Order, PredicateKind.ORDER),
        ],
    )
    def test_kind_and_rendering(self, cls, kind):
        predicate = cls("x = ?", 1)
        assert predicate.kind is kind
        assert predicate.sql == "x = ?"
        assert predicate.args == (1,)
        assert predicate.render() == ("x = ?", (1,))

    def test_no_args_is_empty_tuple(self):
        assert Where("deleted_at IS NULL").args == ()

    def test_non_string_fragment_rejected(self):
        with pytest.raises(TypeError, match="fragment must be str"):
            Where(42)

    def test_equality_by_kind_sql_and_args(self):
        assert Where("a = ?", 1) == Where("a = ?", 1)
        assert Where("a = ?", 1) != Where("a = ?", 2)
        assert Where("a") != Having("a")

    def test_repr_mentions_class_and_fragment(self):
        assert repr(Where("a = ?", 1)) == "Where('a = ?', args=(1,))"


@pytest.mark.unit
class TestOr:
    def test_joins_children_with_or(self):
        predicate = Or(Where("a = ?", 1), Where("b = ?", 2))
        assert predicate.kind is PredicateKind.OR
        assert predicate.sql == "a = ? OR b = ?"
        assert predicate.args == (1, 2)

    def test_accepts_in_conditions(self):
        predicate = Or(Where("a = ?", 1), WhereIn("b", 2, 3))
        assert predicate.sql == "a = ? OR `b` IN (?,?)"
        assert predicate.args == (1, 2, 3)

    def test_non_condition_children_ignored(self):
        predicate = Or(Where("a = ?", 1), Order("a"), Limit(3), inner_join("t"))
        assert predicate.sql == "a = ?"
        assert predicate.args == (1,)
        assert len(predicate.predicates) == 1

    def test_nested_or(self):
        inner = Or(Where("a = ?", 1), Where("b = ?", 2))
        predicate = Or(inner, Where("c = ?", 3))
        assert predicate.sql == "a = ? OR b = ? OR c = ?"
        assert predicate.args == (1, 2, 3)

    def test_raw_fragment_form(self):
        predicate = Or("a = ? OR b = ?", 1, 2)
        assert predicate.sql == "a = ? OR b = ?"
        assert predicate.args == (1, 2)
        assert predicate.predicates == ()

    def test_empty_or(self):
        predicate = Or()
        assert predicate.sql == ""
        assert predicate.args == ()

    def test_empty_children_dropped(self):
        predicate = Or(Or(), Where("  "), Where("a = ?", 1))
        assert predicate.sql == "a = ?"
        assert predicate.args == (1,)

    def test_rejects_non_predicates(self):
        with pytest.raises(TypeError, match="Or\\(\\) takes predicates"):
            Or(Where("a = ?", 1), 5)

    def test_or_is_a_condition(self):
        assert PredicateKind.OR in CONDITION_KINDS


@pytest.mark.unit
class TestWhereIn:
    def test_in_placeholders_sized_to_args(self):
        predicate = WhereIn("role", "admin", "owner", "guest")
        assert predicate.kind is PredicateKind.WHERE_IN
        assert predicate.sql == "`role` IN (?,?,?)"
        assert predicate.args == ("admin", "owner", "guest")

    def test_not_in(self):
        predicate = WhereNotIn("id", 1, 2)
        assert predicate.kind is PredicateKind.WHERE_NOT_IN
        assert predicate.sql == "`id` NOT IN (?,?)"

    @pytest.mark.parametrize("cls", [WhereIn, WhereNotIn])
    def test_empty_list_renders_true_literal(self, cls):
        """An empty list matches every row for both IN and NOT IN."""
        predicate = cls("id")
        assert predicate.sql == "1"
        assert predicate.args == ()

    def test_dotted_column(self):
        assert WhereIn("u.id", 1).sql == "`u`.`id` IN (?)"


@pytest.mark.unit
class TestJoin:
    @pytest.mark.parametrize(
        "factory, keyword",
        [
            (inner_join, "INNER"),
            (outer_join, "OUTER"),
            (natural_join, "NATURAL"),
            (left_join, "LEFT"),
            (right_join, "RIGHT"),
        ],
    )
    def test_factories(self, factory, keyword):
        predicate = factory("orders o", "o.user_id = users.id")
        assert predicate.kind is PredicateKind.JOIN
        assert predicate.sql == f" {keyword} JOIN orders o ON o.user_id = users.id "

    def test_without_on_clause(self):
        assert natural_join("profiles").sql == " NATURAL JOIN profiles "

    def test_join_kind_from_lowercase_string(self):
        assert Join("left", "t").join_kind is JoinKind.LEFT

    def test_unknown_join_kind(self):
        with pytest.raises(ValueError):
            Join("cross", "t")

    def test_join_arguments(self):
        predicate = left_join("orders o", "o.user_id = u.id AND o.total > ?", 100)
        assert predicate.args == (100,)


@pytest.mark.unit
class TestBounds:
    def test_limit(self):
        assert Limit(10).sql == "LIMIT ?"
        assert Limit(10).args == (10,)
        assert Limit(10).kind is PredicateKind.LIMIT

    def test_offset(self):
        assert Offset(0).sql == "OFFSET ?"
        assert Offset(0).args == (0,)
        assert Offset(0).kind is PredicateKind.OFFSET

    @pytest.mark.parametrize("value", [-1, 1.5, "10", True, None])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            Limit(value)
