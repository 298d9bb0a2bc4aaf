from __future__ import annotations

import pytest

from datamirror.codec.values import (
    INT_MAX,
    format_number,
    is_null_or_empty,
    materialize,
    nvl,
    parse_integer,
    parse_real,
    read_value,
    url_decode,
    write_value,
)
from datamirror.domain.catalog import catalog_for
from datamirror.domain.models import ConversionError, FieldAccessError
from datamirror.domain.sentinels import FORCE_NULL, FORCE_ZERO, FieldValue, ValueState
from tests.records import Customer, MixedCase, Order


def _field(record_type, name):
    return catalog_for(record_type).get(name)


@pytest.mark.parametrize("text", [None, "", "   ", "null", "NULL", "undefined", "Undefined"])
def test_is_null_or_empty_true(text):
    assert is_null_or_empty(text)


@pytest.mark.parametrize("text", ["x", " a ", "nullable", "0"])
def test_is_null_or_empty_false(text):
    assert not is_null_or_empty(text)


def test_nvl():
    assert nvl(None) == ""
    assert nvl("null") == ""
    assert nvl("Rome") == "Rome"


def test_parse_integer():
    assert parse_integer("42") == 42
    assert parse_integer("-7") == -7
    assert parse_integer("+3") == 3


@pytest.mark.parametrize("text", [None, "", " 4", "4.0", "abc", "1_000", str(INT_MAX + 1)])
def test_parse_integer_rejects(text):
    with pytest.raises(ConversionError):
        parse_integer(text)


def test_parse_real_plain_syntax_first():
    assert parse_real("1.5") == 1.5
    assert parse_real("-2e3") == -2000.0
    assert parse_real("1.234") == 1.234
    assert parse_real(" 3.25 ") == 3.25


def test_parse_real_falls_back_to_italian_format():
    assert parse_real("1.234,5") == 1234.5
    assert parse_real("12,5") == 12.5
    assert parse_real("-0,75") == -0.75
    assert parse_real("1.234.567") == 1234567.0


def test_parse_real_fallback_accepts_trailing_text():
    assert parse_real("12,5 kg") == 12.5


def test_parse_real_blank_is_zero():
    assert parse_real("") == 0.0
    assert parse_real(None) == 0.0


@pytest.mark.parametrize("text", ["abc", "-", ","])
def test_parse_real_rejects(text):
    with pytest.raises(ConversionError):
        parse_real(text)


def test_parse_real_custom_separators():
    assert parse_real("1'234.5x", decimal_separator=".", grouping_separator="'") == 1234.5


def test_read_value_states():
    order = Order(order_pkid=7, customer_id=FORCE_ZERO, amount=FORCE_NULL, note="")
    assert read_value(order, _field(Order, "order_pkid")) == FieldValue(ValueState.VALUE, 7)
    assert read_value(order, _field(Order, "customer_id")).state is ValueState.FORCE_ZERO
    assert read_value(order, _field(Order, "amount")).state is ValueState.FORCE_NULL
    assert read_value(order, _field(Order, "note")) == FieldValue(ValueState.DEFAULT, "")


def test_read_value_zero_is_default():
    value = read_value(Customer(age=0), _field(Customer, "age"))
    assert not value.significant
    assert value.value == 0


def test_read_value_real_accepts_int():
    value = read_value(Customer(balance=3), _field(Customer, "balance"))
    assert value == FieldValue(ValueState.VALUE, 3.0)


def test_read_value_type_mismatch_raises():
    with pytest.raises(FieldAccessError):
        read_value(Customer(age="30"), _field(Customer, "age"))
    with pytest.raises(FieldAccessError):
        read_value(Customer(name=FORCE_ZERO), _field(Customer, "name"))
    with pytest.raises(FieldAccessError):
        read_value(Customer(age=True), _field(Customer, "age"))


def test_parse_real_fallback_stops_at_first_foreign_character():
    assert parse_real("1_000.5") == 1.0


def test_read_value_missing_attribute_raises():
    record = MixedCase()
    del record.apple
    with pytest.raises(FieldAccessError):
        read_value(record, _field(MixedCase, "apple"))


def test_write_value_stores_sentinel_and_field_value():
    order = Order()
    write_value(order, _field(Order, "customer_id"), FieldValue.force_zero())
    write_value(order, _field(Order, "amount"), FORCE_NULL)
    write_value(order, _field(Order, "note"), FieldValue.of("hi"))
    assert order.customer_id is FORCE_ZERO
    assert order.amount is FORCE_NULL
    assert order.note == "hi"


def test_write_value_rejects_sentinel_in_text_field():
    with pytest.raises(FieldAccessError):
        write_value(Order(), _field(Order, "note"), FORCE_ZERO)


def test_materialize():
    amount = _field(Order, "amount")
    customer_id = _field(Order, "customer_id")
    assert materialize(amount, FieldValue.force_zero()) == 0.0
    assert isinstance(materialize(amount, FieldValue.force_zero()), float)
    assert materialize(customer_id, FieldValue.force_zero()) == 0
    assert materialize(customer_id, FieldValue.force_null()) is None
    assert materialize(customer_id, FieldValue.of(5)) == 5


def test_format_number():
    assert format_number(_field(Customer, "age"), 30) == "30"
    assert format_number(_field(Customer, "balance"), 1.5) == "1.5"
    assert format_number(_field(Customer, "balance"), 2) == "2.0"


def test_url_decode_legacy_encoding():
    assert url_decode("caf%E9+%A4", "ISO-8859-15") == "café €"


def test_url_decode_rejects_malformed_escape():
    with pytest.raises(ConversionError):
        url_decode("100%", "ISO-8859-15")


def test_url_decode_unknown_encoding():
    with pytest.raises(ConversionError):
        url_decode("a%20b", "no-such-charset")
