#!/usr/bin/env python3

"""Weight resolution for a gateway under a routing policy."""

import logging

from typing import Callable, Mapping

from indisoluble.gateway_dns_endpoints.records import label_selector
from indisoluble.gateway_dns_endpoints.records.label_selector import LabelSelector
from indisoluble.gateway_dns_endpoints.records.routing import Routing


SelectorMatcher = Callable[[LabelSelector, Mapping[str, str]], bool]


def resolve_weight(
    routing: Routing,
    labels: Mapping[str, str],
    matcher: SelectorMatcher = label_selector.matches,
) -> int:
    """Return the weight of the first custom weight matching labels.

    Falls back to the default weight when nothing matches or when a selector
    cannot be evaluated.
    """
    for custom_weight in routing.custom_weights or ():
        try:
            is_match = matcher(custom_weight.selector, labels)
        except ValueError as ex:
            logging.warning(
                "Invalid selector in custom weight %d, using default weight %d: %s",
                custom_weight.weight,
                routing.default_weight,
                ex,
            )
            return routing.default_weight

        if is_match:
            logging.debug(
                "Labels %s matched custom weight %d", labels, custom_weight.weight
            )
            return custom_weight.weight

    return routing.default_weight
