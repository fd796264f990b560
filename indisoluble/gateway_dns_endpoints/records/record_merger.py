#!/usr/bin/env python3

"""Reconciliation of freshly generated records with published ones.

Records that already exist keep their identity and are updated in place,
so metadata attached by external collaborators (e.g. health check ids)
survives regeneration.

A name and set identifier may carry one record per type, as happens when
the simple strategy publishes both A and CNAME records for a hostname.
"""

import logging

import dns.rdatatype

from typing import Dict, Iterable, List, Optional, Tuple

from indisoluble.gateway_dns_endpoints.records.record import Record, RecordKey


_Slot = Tuple[RecordKey, dns.rdatatype.RdataType]


class RecordMerger:
    def __init__(self, current_records: Iterable[Record]):
        self._current: Dict[_Slot, Record] = {
            (record.key, record.record_type): record for record in current_records
        }
        self._emitted: Dict[_Slot, Record] = {}

    def _claim_current(
        self, key: RecordKey, record_type: dns.rdatatype.RdataType
    ) -> Optional[Record]:
        # Each published record is handed out at most once per run
        record = self._current.pop((key, record_type), None)
        if record is not None:
            return record

        slot = next((slot for slot in self._current if slot[0] == key), None)
        return self._current.pop(slot) if slot else None

    def create_or_update(
        self,
        name: str,
        targets: Iterable[str],
        record_type: dns.rdatatype.RdataType,
        set_identifier: str,
        ttl: int,
    ) -> Record:
        """Return the record for (name, set_identifier, record_type) with the given data."""
        key = RecordKey(name, set_identifier)
        slot = (key, record_type)

        record = self._emitted.get(slot) or self._claim_current(key, record_type)
        if record is None:
            record = Record(name, record_type, targets, ttl, set_identifier)
            logging.debug("Created %s", record)
        else:
            record.update(record_type, targets, ttl)
            logging.debug("Updated %s", record)

        self._emitted[slot] = record
        return record

    def records(self) -> List[Record]:
        """Get emitted records in emission order."""
        return list(self._emitted.values())
