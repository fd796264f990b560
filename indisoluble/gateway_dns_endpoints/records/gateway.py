#!/usr/bin/env python3

"""Gateway state consumed by endpoint generation.

Provides the address and gateway representations reported by the cluster
state collaborator: a set of addresses plus the labels, name and namespace
of the gateway instance.
"""

import enum

from typing import FrozenSet, List, Mapping, NamedTuple, Tuple

from indisoluble.gateway_dns_endpoints.tools.is_valid_ip import is_valid_ip
from indisoluble.gateway_dns_endpoints.tools.is_valid_subdomain import (
    is_valid_subdomain,
)


class AddressType(str, enum.Enum):
    IP_ADDRESS = "IPAddress"
    HOSTNAME = "Hostname"


class GatewayAddress:
    """Address where a gateway is reachable, either an IP or a hostname."""

    @property
    def address_type(self) -> AddressType:
        """Get the kind of address."""
        return self._address_type

    @property
    def value(self) -> str:
        """Get the IP or hostname."""
        return self._value

    @property
    def is_ip(self) -> bool:
        return self._address_type == AddressType.IP_ADDRESS

    def __init__(self, address_type: AddressType, value: str):
        """Initialize address with validation of its value."""
        address_type = AddressType(address_type)
        if address_type == AddressType.IP_ADDRESS:
            success, error = is_valid_ip(value)
            if not success:
                raise ValueError(f"Invalid IP address '{value}': {error}")
        else:
            success, error = is_valid_subdomain(value)
            if not success:
                raise ValueError(f"Invalid hostname '{value}': {error}")

        self._address_type = address_type
        self._value = value

    def __eq__(self, other):
        if not isinstance(other, GatewayAddress):
            return False

        return self.address_type == other.address_type and self.value == other.value

    def __hash__(self):
        return hash((self.address_type, self.value))

    def __repr__(self):
        return (
            f"GatewayAddress(address_type={self.address_type.value}, "
            f"value='{self.value}')"
        )


class Gateway(NamedTuple):
    name: str
    namespace: str
    labels: Mapping[str, str]
    addresses: FrozenSet[GatewayAddress]


def split_addresses(gateway: Gateway) -> Tuple[List[str], List[str]]:
    """Split gateway addresses into sorted IP values and hostname values."""
    ips = sorted(address.value for address in gateway.addresses if address.is_ip)
    hostnames = sorted(
        address.value for address in gateway.addresses if not address.is_ip
    )

    return ips, hostnames
