#!/usr/bin/env python3

"""IP address validation utilities.

Provides functions to validate IPv4 and IPv6 addresses reported by
gateways.
"""

import dns.inet

from typing import Tuple


def is_valid_ip(ip: str) -> Tuple[bool, str]:
    """Validate IPv4 or IPv6 address format."""
    if not ip:
        return (False, "It cannot be empty")

    if not dns.inet.is_address(ip):
        return (False, "It must be a valid IPv4 or IPv6 address")

    return (True, "")
