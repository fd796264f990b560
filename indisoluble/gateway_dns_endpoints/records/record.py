#!/usr/bin/env python3

"""DNS record produced by endpoint generation.

Provides a mutable record whose identity is its name plus set identifier,
so previously published records can be updated in place and keep any
metadata attached to them by external collaborators.
"""

import dns.rdatatype

from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional


PROVIDER_ATTRIBUTE_WEIGHT = "weight"
PROVIDER_ATTRIBUTE_GEO_CODE = "geo-code"


class RecordKey(NamedTuple):
    """Identity of a record within a record set."""

    name: str
    set_identifier: str


class Record:
    """DNS record with targets, TTL and routing metadata."""

    @property
    def key(self) -> RecordKey:
        """Get the identity of this record."""
        return RecordKey(self.name, self.set_identifier)

    @property
    def type_text(self) -> str:
        """Get the record type as text (A, CNAME)."""
        return dns.rdatatype.to_text(self.record_type)

    def __init__(
        self,
        name: str,
        record_type: dns.rdatatype.RdataType,
        targets: Iterable[str],
        ttl: int,
        set_identifier: str = "",
        provider_attributes: Optional[Mapping[str, str]] = None,
        labels: Optional[Mapping[str, str]] = None,
    ):
        self.name = name
        self.record_type = dns.rdatatype.RdataType.make(record_type)
        self.targets = list(targets)
        self.ttl = ttl
        self.set_identifier = set_identifier or ""
        self.provider_attributes = dict(provider_attributes or {})
        self.labels = dict(labels or {})

    def update(
        self, record_type: dns.rdatatype.RdataType, targets: Iterable[str], ttl: int
    ) -> "Record":
        """Replace type, targets and TTL in place, keeping everything else."""
        self.record_type = dns.rdatatype.RdataType.make(record_type)
        self.targets = list(targets)
        self.ttl = ttl

        return self

    def set_provider_attribute(self, name: str, value: str):
        self.provider_attributes[name] = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type_text,
            "targets": list(self.targets),
            "ttl": self.ttl,
            "set_identifier": self.set_identifier,
            "provider_attributes": dict(self.provider_attributes),
            "labels": dict(self.labels),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Record":
        """Build a record from its dictionary form, raising ValueError when invalid."""
        try:
            return cls(
                name=raw["name"],
                record_type=dns.rdatatype.from_text(raw["type"]),
                targets=raw["targets"],
                ttl=int(raw["ttl"]),
                set_identifier=raw.get("set_identifier", ""),
                provider_attributes=raw.get("provider_attributes"),
                labels=raw.get("labels"),
            )
        except KeyError as ex:
            raise ValueError(f"Missing record field {ex}") from ex
        except dns.rdatatype.UnknownRdatatype as ex:
            raise ValueError(f"Unknown record type '{raw['type']}'") from ex

    def __eq__(self, other):
        if not isinstance(other, Record):
            return False

        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        targets_str = ", ".join(self.targets)

        return (
            f"Record(name={self.name}, type={self.type_text}, "
            f"set_identifier='{self.set_identifier}', ttl={self.ttl}, "
            f"targets=[{targets_str}])"
        )


def sort_records(records: Iterable[Record]) -> List[Record]:
    """Order records by identity, then type, so output never depends on iteration order."""
    return sorted(records, key=lambda record: (record.key, record.type_text))
