from __future__ import annotations

import pytest

from datamirror.codec.sources import ParameterList
from datamirror.config import Settings
from datamirror.domain.models import TypeTag
from datamirror.domain.sentinels import FORCE_NULL, FORCE_ZERO
from datamirror.statements import (
    bind_parameters,
    bound_values,
    marker_key_filter,
    significant_fields,
    where_clause,
)
from tests.records import Customer, MixedCase, Order, Timestamps


def test_where_clause_covers_significant_fields_in_catalog_order():
    assert where_clause(Customer(name="Al", age=30)) == "AGE = ? AND NAME = ?"


def test_where_clause_empty_when_nothing_significant():
    assert where_clause(Customer()) == ""
    assert where_clause(Customer(name="", age=0, balance=0.0)) == ""


def test_where_clause_keeps_forced_fields():
    order = Order(customer_id=FORCE_ZERO, amount=FORCE_NULL)
    assert where_clause(order) == "AMOUNT = ? AND CUSTOMER_ID = ?"


def test_where_clause_excludes_key_fields():
    order = Order(order_pkid=4, note="x")
    assert where_clause(order) == "NOTE = ? AND ORDER_PKID = ?"
    assert where_clause(order, exclude_keys=True) == "NOTE = ?"


def test_where_clause_custom_placeholder():
    assert where_clause(Customer(age=1), placeholder="%s") == "AGE = %s"


def test_where_clause_for_unmappable_type():
    assert where_clause(Timestamps()) == ""


def test_bound_values_match_predicate_order():
    order = Order(order_pkid=4, customer_id=FORCE_ZERO, amount=FORCE_NULL, note="x")
    assert where_clause(order) == "AMOUNT = ? AND CUSTOMER_ID = ? AND NOTE = ? AND ORDER_PKID = ?"
    assert bound_values(order) == [None, 0, "x", 4]


def test_bind_parameters_types_forced_values():
    sink = bind_parameters(Order(customer_id=FORCE_NULL, amount=FORCE_ZERO), ParameterList())
    assert sink.values == [0.0, None]
    assert sink.types == [TypeTag.REAL, TypeTag.INTEGER]


def test_bind_parameters_normalizes_local_dates():
    order = Order(created="25/12/2020", note="2020-12-25")
    assert bound_values(order) == ["20201225000000", "2020-12-25"]


def test_bind_parameters_from_start_position():
    sink = ParameterList()
    sink.set_text(1, "tenant")
    bind_parameters(Customer(name="Al"), sink, start=2)
    assert sink.values == ["tenant", "Al"]


def test_bind_parameters_exclude_keys_with_custom_filter():
    is_customer = marker_key_filter("customer")
    order = Order(order_pkid=1, customer_id=2)
    assert bound_values(order, exclude_keys=True, key_filter=is_customer) == [1]
    assert where_clause(order, exclude_keys=True, key_filter=is_customer) == "ORDER_PKID = ?"


def test_key_marker_from_settings(override_settings):
    override_settings(DATAMIRROR_KEY_MARKER="_ID")
    order = Order(order_pkid=1, customer_id=2)
    assert bound_values(order, exclude_keys=True) == [1]


def test_sink_errors_propagate():
    class FailingSink(ParameterList):
        def set_int(self, position, value):
            raise RuntimeError("driver rejected bind")

    with pytest.raises(RuntimeError):
        bind_parameters(Customer(age=3), FailingSink())


def test_unreadable_fields_are_skipped():
    record = MixedCase()
    record.apple = "pie"
    record.Banana = "seven"
    assert [field.name for field, _ in significant_fields(record)] == ["apple"]
    assert bound_values(record) == ["pie"]


def test_key_marker_from_explicit_settings(override_settings):
    override_settings(DATAMIRROR_KEY_MARKER="PKID")
    settings = Settings(key_marker="CUSTOMER")
    order = Order(order_pkid=1, customer_id=2)
    assert where_clause(order, exclude_keys=True, settings=settings) == "ORDER_PKID = ?"
    assert bound_values(order, exclude_keys=True, settings=settings) == [1]
