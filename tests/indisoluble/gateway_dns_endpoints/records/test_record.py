#!/usr/bin/env python3

import dns.rdatatype
import pytest

from indisoluble.gateway_dns_endpoints.records.record import (
    Record,
    RecordKey,
    sort_records,
)


def test_init_with_valid_parameters():
    record = Record(
        "www.example.com", dns.rdatatype.A, ("192.0.2.1", "192.0.2.2"), 60
    )

    assert record.name == "www.example.com"
    assert record.record_type == dns.rdatatype.A
    assert record.type_text == "A"
    assert record.targets == ["192.0.2.1", "192.0.2.2"]
    assert record.ttl == 60
    assert record.set_identifier == ""
    assert record.provider_attributes == {}
    assert record.labels == {}
    assert record.key == RecordKey("www.example.com", "")


def test_init_with_text_type_and_none_identifier():
    record = Record("www.example.com", "CNAME", ["edge.example.net"], 60, None)

    assert record.record_type == dns.rdatatype.CNAME
    assert record.set_identifier == ""


def test_update_keeps_identity_and_metadata():
    record = Record(
        "ie.klb.example.com",
        dns.rdatatype.CNAME,
        ["old.example.net"],
        60,
        "old.example.net",
        provider_attributes={"weight": "100"},
        labels={"health-check-id": "hc-1"},
    )

    updated = record.update(dns.rdatatype.A, ["192.0.2.1"], 300)

    assert updated is record
    assert record.record_type == dns.rdatatype.A
    assert record.targets == ["192.0.2.1"]
    assert record.ttl == 300
    assert record.set_identifier == "old.example.net"
    assert record.provider_attributes == {"weight": "100"}
    assert record.labels == {"health-check-id": "hc-1"}


def test_set_provider_attribute_replaces_value():
    record = Record("klb.example.com", dns.rdatatype.CNAME, ["x.example.com"], 300)

    record.set_provider_attribute("geo-code", "IE")
    record.set_provider_attribute("geo-code", "ES")

    assert record.provider_attributes == {"geo-code": "ES"}


def test_equality_uses_name_and_set_identifier():
    record1 = Record("klb.example.com", dns.rdatatype.CNAME, ["a"], 300, "IE")
    record2 = Record("klb.example.com", dns.rdatatype.A, ["192.0.2.1"], 60, "IE")
    record3 = Record("klb.example.com", dns.rdatatype.CNAME, ["a"], 300, "ES")

    assert record1 == record2
    assert record1 != record3
    assert record1 != "klb.example.com"
    assert set([record1, record2, record3]) == set([record1, record3])


def test_keys_do_not_collide_on_concatenation():
    record1 = Record("a.example.com", dns.rdatatype.CNAME, ["x"], 60, "b")
    record2 = Record("a.example.comb", dns.rdatatype.CNAME, ["x"], 60, "")

    assert record1.key != record2.key
    assert record1 != record2


def test_dict_round_trip():
    record = Record(
        "ie.klb.example.com",
        dns.rdatatype.CNAME,
        ["edge.example.net"],
        60,
        "edge.example.net",
        provider_attributes={"weight": "120"},
        labels={"owner": "me"},
    )

    as_dict = record.to_dict()

    assert as_dict == {
        "name": "ie.klb.example.com",
        "type": "CNAME",
        "targets": ["edge.example.net"],
        "ttl": 60,
        "set_identifier": "edge.example.net",
        "provider_attributes": {"weight": "120"},
        "labels": {"owner": "me"},
    }
    assert Record.from_dict(as_dict).to_dict() == as_dict


def test_from_dict_with_minimal_fields():
    record = Record.from_dict(
        {"name": "www.example.com", "type": "A", "targets": ["192.0.2.1"], "ttl": 60}
    )

    assert record.set_identifier == ""
    assert record.provider_attributes == {}
    assert record.labels == {}


@pytest.mark.parametrize(
    "raw,expected_message",
    [
        ({"type": "A", "targets": [], "ttl": 60}, "Missing record field"),
        ({"name": "a", "type": "NOPE", "targets": [], "ttl": 60}, "Unknown record type"),
        ({"name": "a", "type": "A", "targets": [], "ttl": "x"}, "invalid literal"),
    ],
)
def test_from_dict_with_invalid_fields(raw, expected_message):
    with pytest.raises(ValueError, match=expected_message):
        Record.from_dict(raw)


def test_repr():
    record = Record(
        "www.example.com", dns.rdatatype.A, ["192.0.2.1", "192.0.2.2"], 60
    )

    assert f"{record}" == (
        "Record(name=www.example.com, type=A, set_identifier='', ttl=60, "
        "targets=[192.0.2.1, 192.0.2.2])"
    )


def test_sort_records_by_name_then_set_identifier():
    record_a = Record("klb.example.com", dns.rdatatype.CNAME, ["x"], 300, "default")
    record_b = Record("klb.example.com", dns.rdatatype.CNAME, ["x"], 300, "IE")
    record_c = Record("example.com", dns.rdatatype.CNAME, ["x"], 300)
    record_d = Record("klb.example.com", dns.rdatatype.CNAME, ["x"], 300, "")

    ordered = sort_records([record_a, record_b, record_c, record_d])

    assert [record.key for record in ordered] == [
        RecordKey("example.com", ""),
        RecordKey("klb.example.com", ""),
        RecordKey("klb.example.com", "IE"),
        RecordKey("klb.example.com", "default"),
    ]


def test_sort_records_same_identity_by_type():
    cname = Record("www.example.com", dns.rdatatype.CNAME, ["edge.example.net"], 60)
    a = Record("www.example.com", dns.rdatatype.A, ["192.0.2.1"], 60)

    ordered = sort_records([cname, a])

    assert [record.type_text for record in ordered] == ["A", "CNAME"]
