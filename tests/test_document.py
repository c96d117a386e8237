"""Tests for the filter document and its merge rules."""

from __future__ import annotations

import pytest

from findexpr.document import (
    MERGE_RULES,
    Action,
    FilterDocument,
    OperatorSet,
    Scalar,
    Slot,
)
from findexpr.exceptions import FieldConflictError
from findexpr.terms import Operator, Term


def _term(field: str, operator: Operator, raw: str = "1") -> Term:
    source = f"{field}{operator.symbol}{raw}"
    return Term(field=field, operator=operator, raw_value=raw, source=source)


class TestMergeRules:
    """The merge table is the contract for combining terms on one field."""

    @pytest.mark.req("MERGE-001")
    def test_table_is_complete(self) -> None:
        assert set(MERGE_RULES) == {(slot, eq) for slot in Slot for eq in (True, False)}

    @pytest.mark.req("MERGE-001")
    def test_only_comparisons_merge(self) -> None:
        merging = [key for key, action in MERGE_RULES.items() if action is Action.MERGE]
        assert merging == [(Slot.OPERATOR_SET, False)]

    def test_absent_field_always_inserts(self) -> None:
        assert MERGE_RULES[(Slot.ABSENT, True)] is Action.INSERT
        assert MERGE_RULES[(Slot.ABSENT, False)] is Action.INSERT


class TestFilterDocument:
    """Tests for FilterDocument.add."""

    def test_equality_inserts_scalar(self) -> None:
        doc = FilterDocument()
        doc.add(_term("pages", Operator.EQ), 400.0)
        assert doc["pages"] == Scalar(400.0)
        assert doc.to_dict() == {"pages": 400.0}

    def test_comparison_inserts_operator_set(self) -> None:
        doc = FilterDocument()
        doc.add(_term("pages", Operator.NOT_EQ), 288.0)
        assert doc["pages"] == OperatorSet({"$ne": 288.0})

    @pytest.mark.req("MERGE-002")
    def test_comparisons_merge_in_first_insertion_order(self) -> None:
        doc = FilterDocument()
        doc.add(_term("pages", Operator.GT), 100.0)
        doc.add(_term("pages", Operator.LT), 500.0)
        doc.add(_term("pages", Operator.GT), 150.0)
        assert doc.to_dict() == {"pages": {"$gt": 150.0, "$lt": 500.0}}
        assert list(doc.to_dict()["pages"]) == ["$gt", "$lt"]

    @pytest.mark.req("MERGE-003")
    def test_second_equality_conflicts(self) -> None:
        doc = FilterDocument()
        doc.add(_term("pages", Operator.EQ), 1.0)
        with pytest.raises(FieldConflictError) as exc:
            doc.add(_term("pages", Operator.EQ), 2.0)
        assert exc.value.field == "pages"
        assert exc.value.existing == "scalar"
        assert exc.value.incoming == "equality"
        assert doc.to_dict() == {"pages": 1.0}

    @pytest.mark.req("MERGE-003")
    def test_comparison_after_equality_conflicts(self) -> None:
        doc = FilterDocument()
        doc.add(_term("pages", Operator.EQ), 1.0)
        with pytest.raises(FieldConflictError) as exc:
            doc.add(_term("pages", Operator.GT), 2.0)
        assert exc.value.incoming == "'$gt' comparison"

    @pytest.mark.req("MERGE-003")
    def test_equality_after_comparison_conflicts(self) -> None:
        doc = FilterDocument()
        doc.add(_term("pages", Operator.LTE), 1.0)
        with pytest.raises(FieldConflictError) as exc:
            doc.add(_term("pages", Operator.EQ), 2.0)
        assert exc.value.existing == "operator set"

    def test_fields_keep_insertion_order(self) -> None:
        doc = FilterDocument()
        doc.add(_term("b", Operator.EQ), "x")
        doc.add(_term("a", Operator.GT), 1.0)
        assert list(doc) == ["b", "a"]
        assert len(doc) == 2
        assert "a" in doc
        assert "c" not in doc

    def test_empty_document(self) -> None:
        doc = FilterDocument()
        assert len(doc) == 0
        assert doc.to_dict() == {}
