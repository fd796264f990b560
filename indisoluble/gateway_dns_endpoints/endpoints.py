#!/usr/bin/env python3

"""Generation of the DNS records publishing a gateway listener hostname.

Two strategies are supported:

Simple: the hostname resolves straight to the gateway addresses.

Load-balanced: the hostname resolves through a tree of CNAME records that
lets the DNS provider route first by client geography and then by weight.

Example (default geo IE)

shop.example.com CNAME klb.shop.example.com
klb.shop.example.com CNAME geolocation IE ie.klb.shop.example.com
klb.shop.example.com CNAME geolocation * ie.klb.shop.example.com
ie.klb.shop.example.com CNAME weighted 100 ab1cd2-ef3gh4.klb.shop.example.com
ie.klb.shop.example.com CNAME weighted 100 aws.lb.com
ab1cd2-ef3gh4.klb.shop.example.com A 192.22.2.1 192.22.2.2
"""

import logging

import dns.name
import dns.rdatatype

from typing import List, Optional, Sequence

from indisoluble.gateway_dns_endpoints.errors import (
    MissingListenerHostError,
    MissingPreviousStateError,
    UnknownRoutingStrategyError,
)
from indisoluble.gateway_dns_endpoints.records.gateway import Gateway, split_addresses
from indisoluble.gateway_dns_endpoints.records.record import (
    PROVIDER_ATTRIBUTE_GEO_CODE,
    PROVIDER_ATTRIBUTE_WEIGHT,
    Record,
    sort_records,
)
from indisoluble.gateway_dns_endpoints.records.record_merger import RecordMerger
from indisoluble.gateway_dns_endpoints.records.routing import (
    LOAD_BALANCED_ROUTING_STRATEGY,
    SIMPLE_ROUTING_STRATEGY,
    Routing,
    validate_routing,
)
from indisoluble.gateway_dns_endpoints.records.weight import resolve_weight
from indisoluble.gateway_dns_endpoints.tools.short_code import short_code


DEFAULT_TTL = 60  # 1 minute
DEFAULT_CNAME_TTL = 300  # 5 minutes

DEFAULT_GEO = "default"
WILDCARD_GEO = "*"

LABEL_LB_ATTRIBUTE_GEO_CODE = "kuadrant.io/lb-attribute-geo-code"

_LB_LABEL = "klb"


def _strip_wildcard(hostname: str) -> str:
    """Return hostname without its leading wildcard label, empty if nothing is left."""
    name = dns.name.from_text(hostname, origin=dns.name.root)
    if name.is_wild():
        name = name.parent()
    elif name != dns.name.root:
        return hostname

    if name == dns.name.root:
        return ""

    return name.to_text(omit_final_dot=True)


def _geo_code(gateway: Gateway) -> str:
    return gateway.labels.get(LABEL_LB_ATTRIBUTE_GEO_CODE, DEFAULT_GEO)


def _cluster_lb_name(routing: Routing, gateway: Gateway, lb_name: str) -> str:
    cluster_code = short_code(routing.cluster_id)
    gateway_code = short_code(f"{gateway.name}-{gateway.namespace}")

    return f"{cluster_code}-{gateway_code}.{lb_name}".lower()


def _simple_endpoints(
    gateway: Gateway, hostname: str, merger: RecordMerger
) -> List[Record]:
    ips, hostnames = split_addresses(gateway)

    if ips:
        merger.create_or_update(hostname, ips, dns.rdatatype.A, "", DEFAULT_TTL)

    if hostnames:
        merger.create_or_update(
            hostname, hostnames, dns.rdatatype.CNAME, "", DEFAULT_TTL
        )

    return merger.records()


def _load_balanced_endpoints(
    gateway: Gateway, routing: Routing, hostname: str, merger: RecordMerger
) -> List[Record]:
    lb_name = f"{_LB_LABEL}.{_strip_wildcard(hostname)}".lower()
    geo_code = _geo_code(gateway)
    geo_lb_name = f"{geo_code}.{lb_name}".lower()

    ips, hostnames = split_addresses(gateway)

    if ips:
        cluster_lb_name = _cluster_lb_name(routing, gateway, lb_name)
        merger.create_or_update(
            cluster_lb_name, ips, dns.rdatatype.A, "", DEFAULT_TTL
        )
        hostnames.append(cluster_lb_name)

    if not hostnames:
        logging.debug("Gateway %s/%s has no addresses", gateway.namespace, gateway.name)
        return []

    weight = str(resolve_weight(routing, gateway.labels))
    for target in hostnames:
        record = merger.create_or_update(
            geo_lb_name, [target], dns.rdatatype.CNAME, target, DEFAULT_TTL
        )
        record.set_provider_attribute(PROVIDER_ATTRIBUTE_WEIGHT, weight)

    record = merger.create_or_update(
        lb_name, [geo_lb_name], dns.rdatatype.CNAME, geo_code, DEFAULT_CNAME_TTL
    )
    # Gateways without the geo label do not advertise a geo code
    if geo_code != DEFAULT_GEO:
        record.set_provider_attribute(PROVIDER_ATTRIBUTE_GEO_CODE, geo_code)

    if geo_code == routing.default_geo_code:
        record = merger.create_or_update(
            lb_name,
            [geo_lb_name],
            dns.rdatatype.CNAME,
            DEFAULT_GEO,
            DEFAULT_CNAME_TTL,
        )
        record.set_provider_attribute(PROVIDER_ATTRIBUTE_GEO_CODE, WILDCARD_GEO)

    merger.create_or_update(
        hostname, [lb_name], dns.rdatatype.CNAME, "", DEFAULT_CNAME_TTL
    )

    return merger.records()


def generate_endpoints(
    gateway: Gateway,
    hostname: Optional[str],
    routing: Routing,
    current_records: Optional[Sequence[Record]],
) -> List[Record]:
    """Return the ordered records publishing hostname for gateway.

    Records in current_records sharing name and set identifier with a
    generated record, preferably also its type, are updated in place and
    returned instead of new ones.
    Raises an EndpointsError subclass when any input is unusable.
    """
    if not hostname or not _strip_wildcard(hostname):
        raise MissingListenerHostError()

    if current_records is None:
        raise MissingPreviousStateError()

    validate_routing(routing)

    merger = RecordMerger(current_records)
    if routing.strategy == SIMPLE_ROUTING_STRATEGY:
        records = _simple_endpoints(gateway, hostname, merger)
    elif routing.strategy == LOAD_BALANCED_ROUTING_STRATEGY:
        records = _load_balanced_endpoints(gateway, routing, hostname, merger)
    else:
        raise UnknownRoutingStrategyError(routing.strategy)

    logging.debug(
        "Generated %d records for %s using %s strategy",
        len(records),
        hostname,
        routing.strategy,
    )
    return sort_records(records)
