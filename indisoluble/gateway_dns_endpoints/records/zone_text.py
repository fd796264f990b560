#!/usr/bin/env python3

"""Master file rendering of generated records.

Renders records as zone file lines, one per target, with routing metadata
appended as a comment so the output can be reviewed or diffed.
"""

import dns.name
import dns.rdata
import dns.rdataclass

from typing import Iterable, List

from indisoluble.gateway_dns_endpoints.records.record import Record


def _make_comment(record: Record) -> str:
    parts = []
    if record.set_identifier:
        parts.append(f"set-identifier={record.set_identifier}")
    parts.extend(
        f"{name}={value}" for name, value in sorted(record.provider_attributes.items())
    )

    return f" ; {' '.join(parts)}" if parts else ""


def make_record_lines(record: Record) -> List[str]:
    """Render a single record, raising dns.exception.SyntaxError on bad targets."""
    name = dns.name.from_text(record.name, origin=dns.name.root)
    comment = _make_comment(record)

    lines = []
    for target in record.targets:
        rdata = dns.rdata.from_text(
            dns.rdataclass.IN,
            record.record_type,
            target,
            origin=dns.name.root,
            relativize=False,
        )
        lines.append(
            f"{name.to_text()} {record.ttl} IN {record.type_text} {rdata.to_text()}{comment}"
        )

    return lines


def make_zone_lines(records: Iterable[Record]) -> List[str]:
    return [line for record in records for line in make_record_lines(record)]
