#!/usr/bin/env python3

import pytest

from indisoluble.gateway_dns_endpoints.errors import (
    EmptyCustomWeightSelectorError,
    InvalidRoutingPolicyError,
    MissingClusterIdError,
    MissingDefaultGeoCodeError,
    MissingDefaultWeightError,
    ZeroCustomWeightError,
)
from indisoluble.gateway_dns_endpoints.records.label_selector import LabelSelector
from indisoluble.gateway_dns_endpoints.records.routing import (
    LOAD_BALANCED_ROUTING_STRATEGY,
    SIMPLE_ROUTING_STRATEGY,
    CustomWeight,
    Routing,
    RoutingBuilder,
    validate_routing,
)


@pytest.fixture
def routing():
    return (
        RoutingBuilder()
        .with_load_balanced_strategy("cluster-1", "IE", 120)
        .with_custom_weights(
            [CustomWeight(100, LabelSelector(match_labels={"tier": "gold"}))]
        )
        .build()
    )


def test_build_simple_strategy():
    routing = RoutingBuilder().with_simple_strategy().build()

    assert routing.strategy == SIMPLE_ROUTING_STRATEGY


def test_build_load_balanced_strategy(routing):
    assert routing.strategy == LOAD_BALANCED_ROUTING_STRATEGY
    assert routing.cluster_id == "cluster-1"
    assert routing.default_geo_code == "IE"
    assert routing.default_weight == 120
    assert routing.custom_weights == (
        CustomWeight(100, LabelSelector(match_labels={"tier": "gold"})),
    )


def test_simple_strategy_ignores_other_fields():
    validate_routing(Routing(strategy=SIMPLE_ROUTING_STRATEGY))
    validate_routing(
        Routing(
            strategy=SIMPLE_ROUTING_STRATEGY,
            custom_weights=(CustomWeight(0, LabelSelector()),),
        )
    )


@pytest.mark.parametrize(
    "changes,expected_error,expected_message",
    [
        ({"cluster_id": ""}, MissingClusterIdError, "cluster ID is required"),
        ({"default_weight": 0}, MissingDefaultWeightError, "default weight is required"),
        (
            {"default_geo_code": ""},
            MissingDefaultGeoCodeError,
            "default geocode is required",
        ),
        (
            {"custom_weights": (CustomWeight(0, LabelSelector(match_labels={"a": "b"})),)},
            ZeroCustomWeightError,
            "custom weight cannot be zero",
        ),
        (
            {"custom_weights": (CustomWeight(100, LabelSelector()),)},
            EmptyCustomWeightSelectorError,
            "custom weight must define non-empty selector",
        ),
    ],
)
def test_invalid_load_balanced_routing(
    routing, changes, expected_error, expected_message
):
    invalid = routing._replace(**changes)

    with pytest.raises(expected_error, match=expected_message) as exc_info:
        validate_routing(invalid)

    assert isinstance(exc_info.value, InvalidRoutingPolicyError)
    assert isinstance(exc_info.value, ValueError)


def test_valid_load_balanced_routing(routing):
    validate_routing(routing)


def test_builder_rejects_invalid_routing():
    with pytest.raises(MissingClusterIdError):
        RoutingBuilder().with_load_balanced_strategy("", "IE", 120).build()

    with pytest.raises(EmptyCustomWeightSelectorError):
        (
            RoutingBuilder()
            .with_load_balanced_strategy("cluster-1", "IE", 120)
            .with_custom_weights([CustomWeight(10, LabelSelector())])
            .build()
        )
