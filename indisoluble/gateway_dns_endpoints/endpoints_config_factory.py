#!/usr/bin/env python3

import json
import logging

from typing import Any, Dict, List, NamedTuple, Optional

from .errors import InvalidRoutingPolicyError
from .records.gateway import Gateway, GatewayAddress
from .records.label_selector import LabelSelector, LabelSelectorRequirement
from .records.record import Record
from .records.routing import (
    LOAD_BALANCED_ROUTING_STRATEGY,
    SIMPLE_ROUTING_STRATEGY,
    CustomWeight,
    Routing,
    RoutingBuilder,
)
from .tools.is_valid_subdomain import is_valid_subdomain


class EndpointsConfig(NamedTuple):
    hostname: str
    gateway: Gateway
    routing: Routing
    current_records: List[Record]


ARG_CURRENT_RECORDS = "current_records"
ARG_GATEWAY = "gateway"
ARG_HOSTNAME = "hostname"
ARG_ROUTING = "routing"

GATEWAY_ADDRESSES = "addresses"
GATEWAY_ADDRESS_TYPE = "type"
GATEWAY_ADDRESS_VALUE = "value"
GATEWAY_LABELS = "labels"
GATEWAY_NAME = "name"
GATEWAY_NAMESPACE = "namespace"
ROUTING_CLUSTER_ID = "cluster_id"
ROUTING_CUSTOM_WEIGHTS = "custom_weights"
ROUTING_DEFAULT_GEO = "default_geo"
ROUTING_DEFAULT_WEIGHT = "default_weight"
ROUTING_STRATEGY = "strategy"
SELECTOR = "selector"
SELECTOR_MATCH_EXPRESSIONS = "match_expressions"
SELECTOR_MATCH_LABELS = "match_labels"
WEIGHT = "weight"


def _load_json(args: Dict[str, Any], key: str, what: str) -> Optional[Any]:
    try:
        return json.loads(args[key])
    except json.JSONDecodeError as ex:
        logging.error("Failed to parse %s: %s", what, ex)
        return None


def _make_hostname(args: Dict[str, Any]) -> Optional[str]:
    hostname = args[ARG_HOSTNAME]
    success, error = is_valid_subdomain(hostname, allow_wildcard=True)
    if not success:
        logging.error("Hostname '%s' is not a valid FQDN: %s", hostname, error)
        return None

    return hostname


def _make_gateway(args: Dict[str, Any]) -> Optional[Gateway]:
    raw_gateway = _load_json(args, ARG_GATEWAY, "gateway")
    if raw_gateway is None:
        return None

    if not isinstance(raw_gateway, dict):
        logging.error(
            "Gateway must be a dictionary, got %s", type(raw_gateway).__name__
        )
        return None

    labels = raw_gateway.get(GATEWAY_LABELS, {})
    if not isinstance(labels, dict):
        logging.error(
            "Gateway labels must be a dictionary, got %s", type(labels).__name__
        )
        return None

    raw_addresses = raw_gateway.get(GATEWAY_ADDRESSES, [])
    if not isinstance(raw_addresses, list):
        logging.error(
            "Gateway addresses must be a list, got %s", type(raw_addresses).__name__
        )
        return None

    try:
        addresses = frozenset(
            GatewayAddress(raw[GATEWAY_ADDRESS_TYPE], raw[GATEWAY_ADDRESS_VALUE])
            for raw in raw_addresses
        )
    except (KeyError, TypeError, ValueError) as ex:
        logging.error("Invalid gateway address: %s", ex)
        return None

    return Gateway(
        name=raw_gateway.get(GATEWAY_NAME, ""),
        namespace=raw_gateway.get(GATEWAY_NAMESPACE, ""),
        labels=labels,
        addresses=addresses,
    )


def _make_selector(raw_selector: Dict[str, Any]) -> LabelSelector:
    match_expressions = raw_selector.get(SELECTOR_MATCH_EXPRESSIONS)
    if match_expressions is not None:
        match_expressions = [
            LabelSelectorRequirement(
                key=raw["key"],
                operator=raw["operator"],
                values=tuple(raw.get("values") or ()),
            )
            for raw in match_expressions
        ]

    return LabelSelector(
        match_labels=raw_selector.get(SELECTOR_MATCH_LABELS),
        match_expressions=match_expressions,
    )


def _make_custom_weights(raw_weights: List[Any]) -> Optional[List[CustomWeight]]:
    try:
        return [
            CustomWeight(
                weight=int(raw[WEIGHT]), selector=_make_selector(raw.get(SELECTOR, {}))
            )
            for raw in raw_weights
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as ex:
        logging.error("Invalid custom weight: %s", ex)
        return None


def _make_routing(args: Dict[str, Any]) -> Optional[Routing]:
    raw_routing = _load_json(args, ARG_ROUTING, "routing")
    if raw_routing is None:
        return None

    if not isinstance(raw_routing, dict):
        logging.error(
            "Routing must be a dictionary, got %s", type(raw_routing).__name__
        )
        return None

    builder = RoutingBuilder()
    strategy = raw_routing.get(ROUTING_STRATEGY, LOAD_BALANCED_ROUTING_STRATEGY)
    if strategy == SIMPLE_ROUTING_STRATEGY:
        builder.with_simple_strategy()
    elif strategy == LOAD_BALANCED_ROUTING_STRATEGY:
        builder.with_load_balanced_strategy(
            raw_routing.get(ROUTING_CLUSTER_ID, ""),
            raw_routing.get(ROUTING_DEFAULT_GEO, ""),
            raw_routing.get(ROUTING_DEFAULT_WEIGHT, 0),
        )
        custom_weights = _make_custom_weights(
            raw_routing.get(ROUTING_CUSTOM_WEIGHTS, [])
        )
        if custom_weights is None:
            return None

        builder.with_custom_weights(custom_weights)
    else:
        logging.error("Unknown routing strategy '%s'", strategy)
        return None

    try:
        return builder.build()
    except InvalidRoutingPolicyError as ex:
        logging.error("Invalid routing: %s", ex)
        return None


def _make_current_records(args: Dict[str, Any]) -> Optional[List[Record]]:
    raw_records = _load_json(args, ARG_CURRENT_RECORDS, "current records")
    if raw_records is None:
        return None

    if not isinstance(raw_records, list):
        logging.error(
            "Current records must be a list, got %s", type(raw_records).__name__
        )
        return None

    try:
        return [Record.from_dict(raw) for raw in raw_records]
    except (TypeError, ValueError) as ex:
        logging.error("Invalid current record: %s", ex)
        return None


def make_config(args: Dict[str, Any]) -> Optional[EndpointsConfig]:
    hostname = _make_hostname(args)
    if not hostname:
        return None

    gateway = _make_gateway(args)
    if not gateway:
        return None

    routing = _make_routing(args)
    if not routing:
        return None

    current_records = _make_current_records(args)
    if current_records is None:
        return None

    return EndpointsConfig(
        hostname=hostname,
        gateway=gateway,
        routing=routing,
        current_records=current_records,
    )
