#!/usr/bin/env python3

"""Hostname validation utilities.

Provides functions to validate DNS hostnames according to basic DNS naming
rules, character restrictions and length limits. A leading wildcard label
is accepted when requested.
"""

import dns.exception
import dns.name

from typing import Tuple


def is_valid_subdomain(name: str, allow_wildcard: bool = False) -> Tuple[bool, str]:
    """Validate hostname format, character restrictions and lengths."""
    if not name:
        return (False, "It cannot be empty")

    labels = name.split(".")
    if allow_wildcard and labels[0] == "*" and len(labels) > 1:
        labels = labels[1:]

    if not all(
        label and all(c.isalnum() or c == "-" for c in label) for label in labels
    ):
        return (False, "Labels must contain only alphanumeric characters or hyphens")

    try:
        dns.name.from_text(name, origin=dns.name.root)
    except dns.exception.DNSException as ex:
        return (False, f"It is not a valid DNS name: {ex}")

    return (True, "")
