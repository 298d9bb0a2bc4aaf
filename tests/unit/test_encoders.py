from __future__ import annotations

import threading

from datamirror.domain.sentinels import FORCE_NULL, FORCE_ZERO
from datamirror.encoders import SynchronizedDict, as_json, as_map, as_query_string
from datamirror.encoders.json_text import JsonObjectBuilder
from datamirror.encoders.query_string import ENCODING_ERROR_PREFIX, QueryStringBuilder, url_encode
from tests.records import Customer, Order, Product, Timestamps

WRITER_COUNT = 4
WRITES_PER_THREAD = 250


def test_as_map_holds_every_field_in_catalog_order():
    mapping = as_map(Customer(name="Al", age=30))
    assert list(mapping) == ["age", "balance", "city", "name"]
    assert mapping.copy() == {"age": 30, "balance": 0.0, "city": None, "name": "Al"}


def test_as_map_resolves_sentinels():
    mapping = as_map(Order(customer_id=FORCE_ZERO, amount=FORCE_NULL))
    assert mapping["customer_id"] == 0
    assert mapping["amount"] is None


def test_as_map_for_unmappable_type_is_empty():
    assert len(as_map(Timestamps())) == 0


def test_synchronized_dict_concurrent_writers():
    shared = SynchronizedDict()

    def writer(prefix):
        for i in range(WRITES_PER_THREAD):
            shared[f"{prefix}-{i}"] = i

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(WRITER_COUNT)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(shared) == WRITER_COUNT * WRITES_PER_THREAD
    assert "0-0" in shared
    del shared["0-0"]
    assert shared.setdefault("0-0", 5) == 5


def test_query_string_significant_fields_only():
    assert as_query_string(Customer(name="Al", age=30)) == "&age=30&name=Al"
    assert as_query_string(Customer()) == ""


def test_query_string_forced_values():
    order = Order(customer_id=FORCE_ZERO, amount=FORCE_NULL, order_pkid=3)
    assert as_query_string(order) == "&customer_id=0&order_pkid=3"


def test_query_string_real_formatting():
    assert as_query_string(Customer(balance=1234.5)) == "&balance=1234.5"


def test_query_string_url_encoding():
    customer = Customer(name="Caffè Nero", city="a&b")
    assert as_query_string(customer, url_encode_text=True) == "&city=a%26b&name=Caff%E8+Nero"
    assert as_query_string(customer) == "&city=a&b&name=Caffè Nero"


def test_url_encode_reports_unencodable_text():
    assert url_encode("日本", "ISO-8859-15").startswith(ENCODING_ERROR_PREFIX)
    assert url_encode("€", "ISO-8859-15") == "%A4"


def test_query_string_builder():
    assert QueryStringBuilder().add("a", "1").add("b", "x").build() == "&a=1&b=x"


def test_json_skips_default_values():
    assert as_json(Customer(name="Al")) == '{"name":"Al"}'
    assert as_json(Customer(name="", age=0, balance=0.0)) == "{}"


def test_json_prints_forced_zero_and_omits_forced_null():
    order = Order(order_pkid=2, amount=FORCE_NULL, customer_id=FORCE_ZERO)
    assert as_json(order) == '{"customer_id":"0", "order_pkid":"2"}'


def test_json_escapes_text():
    assert '"name":"say \\"hi\\"\\n"' in as_json(Customer(name='say "hi"\n'))


def test_json_for_pydantic_record():
    assert as_json(Product(sku="A1", stock=2)) == '{"sku":"A1", "stock":"2"}'


def test_json_for_unmappable_type():
    assert as_json(Timestamps()) == ""


def test_json_object_builder_escapes_names():
    builder = JsonObjectBuilder().add('we"ird', "1")
    assert len(builder) == 1
    assert builder.build() == '{"we\\"ird":"1"}'
    assert JsonObjectBuilder().build() == "{}"


def test_synchronized_dict_snapshots_survive_concurrent_deletes():
    shared = SynchronizedDict({f"k{i}": i for i in range(WRITES_PER_THREAD)})
    errors = []

    def deleter():
        for i in range(WRITES_PER_THREAD):
            del shared[f"k{i}"]

    def reader():
        try:
            while len(shared):
                for key, value in shared.items():
                    assert shared.get(key, value) == value
                sum(shared.values())
        except KeyError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=deleter), threading.Thread(target=reader)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert shared.items() == []
    assert shared.values() == []
