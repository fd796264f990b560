#!/usr/bin/env python3

import argparse
import json
import logging

import dns.exception

from typing import Any, Dict

from . import endpoints_config_factory as ecf
from .endpoints import generate_endpoints
from .errors import EndpointsError
from .records.routing import LOAD_BALANCED_ROUTING_STRATEGY, SIMPLE_ROUTING_STRATEGY
from .records.zone_text import make_zone_lines


_ARG_LOG_LEVEL = "log_level"
_ARG_OUTPUT_FORMAT = "output_format"
_GRP_GATEWAY = "Gateway"
_GRP_GENERAL = "General"
_GRP_ROUTING = "Routing"
_NAME_CURRENT_RECORDS = "current-records"
_NAME_GATEWAY = "gateway"
_NAME_HOSTNAME = "hostname"
_NAME_LOG_LEVEL = "log-level"
_NAME_OUTPUT_FORMAT = "output-format"
_NAME_ROUTING = "routing"
_VAL_CURRENT_RECORDS = "[]"
_VAL_LOG_LEVEL = logging._levelToName[logging.WARNING].lower()
_VAL_OUTPUT_FORMAT_JSON = "json"
_VAL_OUTPUT_FORMAT_ZONE = "zone"


def _make_arg_parser() -> argparse.ArgumentParser:
    epilog = f"""
Parameter details
=================

{_GRP_GENERAL}
{len(_GRP_GENERAL) * '-'}
--{_NAME_LOG_LEVEL}: Controls verbosity of log output (debug, info, warning, error, critical).
--{_NAME_OUTPUT_FORMAT}: Print records as a JSON list or as zone file lines.

{_GRP_GATEWAY}
{len(_GRP_GATEWAY) * '-'}
--{_NAME_HOSTNAME}: Listener hostname clients resolve, a leading wildcard label is allowed.
--{_NAME_GATEWAY}: JSON description of the gateway: name, namespace, labels and addresses.
--{_NAME_CURRENT_RECORDS}: JSON list of the records currently published for the hostname.

Examples:
    --{_NAME_HOSTNAME} www.example.com
    --{_NAME_GATEWAY} '{{"name":"gw","namespace":"ns","labels":{{"kuadrant.io/lb-attribute-geo-code":"IE"}},"addresses":[{{"type":"IPAddress","value":"192.0.2.1"}}]}}'

{_GRP_ROUTING}
{len(_GRP_ROUTING) * '-'}
--{_NAME_ROUTING}: JSON routing policy. Strategy is either {SIMPLE_ROUTING_STRATEGY} or {LOAD_BALANCED_ROUTING_STRATEGY}.

Examples:
    --{_NAME_ROUTING} '{{"strategy":"{SIMPLE_ROUTING_STRATEGY}"}}'
    --{_NAME_ROUTING} '{{"strategy":"{LOAD_BALANCED_ROUTING_STRATEGY}","cluster_id":"c1","default_geo":"IE","default_weight":120,"custom_weights":[{{"weight":100,"selector":{{"match_labels":{{"tier":"gold"}}}}}}]}}'

Example usage
=============
gateway-dns-endpoints \\
    --{_NAME_HOSTNAME} www.example.com \\
    --{_NAME_GATEWAY} '{{"name":"gw","namespace":"ns","addresses":[{{"type":"IPAddress","value":"192.0.2.1"}}]}}' \\
    --{_NAME_ROUTING} '{{"strategy":"{SIMPLE_ROUTING_STRATEGY}"}}' \\
    --{_NAME_OUTPUT_FORMAT} {_VAL_OUTPUT_FORMAT_ZONE}
"""
    parser = argparse.ArgumentParser(
        description="Gateway DNS endpoints generator",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    general_group = parser.add_argument_group(_GRP_GENERAL)
    general_group.add_argument(
        f"--{_NAME_LOG_LEVEL}",
        type=str,
        choices=[
            name.lower() for name in logging._levelToName.values() if name != "NOTSET"
        ],
        default=_VAL_LOG_LEVEL,
        dest=_ARG_LOG_LEVEL,
        help=f"Logging level (default: {_VAL_LOG_LEVEL})",
    )
    general_group.add_argument(
        f"--{_NAME_OUTPUT_FORMAT}",
        type=str,
        choices=[_VAL_OUTPUT_FORMAT_JSON, _VAL_OUTPUT_FORMAT_ZONE],
        default=_VAL_OUTPUT_FORMAT_JSON,
        dest=_ARG_OUTPUT_FORMAT,
        help=f"Output format (default: {_VAL_OUTPUT_FORMAT_JSON})",
    )
    gw_group = parser.add_argument_group(_GRP_GATEWAY)
    gw_group.add_argument(
        f"--{_NAME_HOSTNAME}",
        type=str,
        required=True,
        dest=ecf.ARG_HOSTNAME,
        help="Listener hostname",
    )
    gw_group.add_argument(
        f"--{_NAME_GATEWAY}",
        type=str,
        required=True,
        dest=ecf.ARG_GATEWAY,
        help=(
            f"Gateway as JSON string (ex. {{'{ecf.GATEWAY_NAME}': name, "
            f"'{ecf.GATEWAY_NAMESPACE}': namespace, '{ecf.GATEWAY_LABELS}': {{...}}, "
            f"'{ecf.GATEWAY_ADDRESSES}': [{{'{ecf.GATEWAY_ADDRESS_TYPE}': type, "
            f"'{ecf.GATEWAY_ADDRESS_VALUE}': value}}, ...]}})"
        ),
    )
    gw_group.add_argument(
        f"--{_NAME_CURRENT_RECORDS}",
        type=str,
        default=_VAL_CURRENT_RECORDS,
        dest=ecf.ARG_CURRENT_RECORDS,
        help=f"Currently published records as JSON list (default: {_VAL_CURRENT_RECORDS})",
    )
    routing_group = parser.add_argument_group(_GRP_ROUTING)
    routing_group.add_argument(
        f"--{_NAME_ROUTING}",
        type=str,
        required=True,
        dest=ecf.ARG_ROUTING,
        help="Routing policy as JSON string",
    )

    return parser


def _main(args: Dict[str, Any]):
    # Set up logging
    numeric_level = getattr(logging, args[_ARG_LOG_LEVEL].upper())
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(levelname)s - %(module)s.%(funcName)s - %(message)s",
    )

    # Compose inputs
    config = ecf.make_config(args)
    if not config:
        return

    # Generate records
    try:
        records = generate_endpoints(
            config.gateway, config.hostname, config.routing, config.current_records
        )
    except EndpointsError as ex:
        logging.error("Failed to generate endpoints for %s: %s", config.hostname, ex)
        return

    logging.info("Generated %d records for %s", len(records), config.hostname)

    # Print them
    if args[_ARG_OUTPUT_FORMAT] == _VAL_OUTPUT_FORMAT_ZONE:
        try:
            lines = make_zone_lines(records)
        except dns.exception.SyntaxError as ex:
            logging.error("Failed to render zone lines for %s: %s", config.hostname, ex)
            return

        for line in lines:
            print(line)
    else:
        print(json.dumps([record.to_dict() for record in records], indent=2))


def main():
    args = _make_arg_parser().parse_args()
    _main(vars(args))
