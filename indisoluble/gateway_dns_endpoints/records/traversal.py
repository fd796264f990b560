#!/usr/bin/env python3

"""Resolution check over a generated record tree.

Follows every CNAME branch from a hostname, across all set identifiers,
and collects the values where resolution ends.
"""

import dns.rdatatype

from typing import Dict, Iterable, List, Set

from indisoluble.gateway_dns_endpoints.records.record import Record


def resolve_targets(records: Iterable[Record], hostname: str) -> Set[str]:
    """Return the terminal values reachable from hostname.

    A values are terminal, as are CNAME targets without records of their
    own. Names already visited are not followed again.
    """
    by_name: Dict[str, List[Record]] = {}
    for record in records:
        by_name.setdefault(record.name, []).append(record)

    terminals = set()
    visited = set()
    pending = [hostname]
    while pending:
        name = pending.pop()
        if name in visited:
            continue
        visited.add(name)

        if name not in by_name:
            terminals.add(name)
            continue

        for record in by_name[name]:
            if record.record_type == dns.rdatatype.CNAME:
                pending.extend(record.targets)
            else:
                terminals.update(record.targets)

    return terminals


def is_traversable(
    records: Iterable[Record], hostname: str, expected_targets: Iterable[str]
) -> bool:
    """Return whether hostname resolves exactly to expected_targets."""
    return resolve_targets(records, hostname) == set(expected_targets)
