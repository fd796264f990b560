#!/usr/bin/env python3

"""Routing policy describing how traffic is spread across gateways.

Provides the policy representation, its validation and a builder that
validates eagerly.
"""

from typing import NamedTuple, Sequence, Tuple

from indisoluble.gateway_dns_endpoints.errors import (
    EmptyCustomWeightSelectorError,
    MissingClusterIdError,
    MissingDefaultGeoCodeError,
    MissingDefaultWeightError,
    ZeroCustomWeightError,
)
from indisoluble.gateway_dns_endpoints.records.label_selector import LabelSelector


SIMPLE_ROUTING_STRATEGY = "simple"
LOAD_BALANCED_ROUTING_STRATEGY = "loadbalanced"


class CustomWeight(NamedTuple):
    weight: int
    selector: LabelSelector


class Routing(NamedTuple):
    """All the information needed to generate endpoints for a gateway."""

    strategy: str = ""
    default_geo_code: str = ""
    default_weight: int = 0
    custom_weights: Tuple[CustomWeight, ...] = ()
    cluster_id: str = ""


def validate_routing(routing: Routing):
    """Raise an InvalidRoutingPolicyError subclass when routing is unusable."""
    # Nothing else matters for the simple strategy
    if routing.strategy == SIMPLE_ROUTING_STRATEGY:
        return

    if not routing.cluster_id:
        raise MissingClusterIdError()

    if routing.default_weight == 0:
        raise MissingDefaultWeightError()

    if not routing.default_geo_code:
        raise MissingDefaultGeoCodeError()

    for custom_weight in routing.custom_weights or ():
        if custom_weight.weight == 0:
            raise ZeroCustomWeightError()
        if custom_weight.selector is None or custom_weight.selector.is_empty:
            raise EmptyCustomWeightSelectorError()


class RoutingBuilder:
    def __init__(self):
        self._routing = Routing()

    def with_simple_strategy(self) -> "RoutingBuilder":
        self._routing = self._routing._replace(strategy=SIMPLE_ROUTING_STRATEGY)
        return self

    def with_load_balanced_strategy(
        self, cluster_id: str, default_geo: str, default_weight: int
    ) -> "RoutingBuilder":
        self._routing = self._routing._replace(
            strategy=LOAD_BALANCED_ROUTING_STRATEGY,
            cluster_id=cluster_id,
            default_geo_code=default_geo,
            default_weight=default_weight,
        )
        return self

    def with_custom_weights(self, weights: Sequence[CustomWeight]) -> "RoutingBuilder":
        self._routing = self._routing._replace(custom_weights=tuple(weights))
        return self

    def build(self) -> Routing:
        validate_routing(self._routing)
        return self._routing
