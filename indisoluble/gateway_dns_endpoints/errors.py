#!/usr/bin/env python3

"""Errors raised while generating gateway DNS endpoints.

Every error aborts generation, no partial record list is ever returned.
"""


class EndpointsError(ValueError):
    """Base class for all endpoint generation failures."""


class MissingListenerHostError(EndpointsError):
    def __init__(self):
        super().__init__("listener hostname is empty")


class MissingPreviousStateError(EndpointsError):
    def __init__(self):
        super().__init__("require current endpoints")


class UnknownRoutingStrategyError(EndpointsError):
    def __init__(self, strategy: str):
        super().__init__(f"unknown routing strategy : {strategy}")
        self.strategy = strategy


class InvalidRoutingPolicyError(EndpointsError):
    """Base class for routing policy validation failures."""


class MissingClusterIdError(InvalidRoutingPolicyError):
    def __init__(self):
        super().__init__("cluster ID is required")


class MissingDefaultWeightError(InvalidRoutingPolicyError):
    def __init__(self):
        super().__init__("default weight is required")


class MissingDefaultGeoCodeError(InvalidRoutingPolicyError):
    def __init__(self):
        super().__init__("default geocode is required")


class ZeroCustomWeightError(InvalidRoutingPolicyError):
    def __init__(self):
        super().__init__("custom weight cannot be zero")


class EmptyCustomWeightSelectorError(InvalidRoutingPolicyError):
    def __init__(self):
        super().__init__("custom weight must define non-empty selector")
