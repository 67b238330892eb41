# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Main entry point for the syslog sender

# Standard library imports
import argparse
import logging
import sys

from datetime import datetime
from typing import Any, Dict, List, Optional

# Local/package imports
from ziggiz_courier_dropoff_syslog.config import Config, configure_logging, load_config
from ziggiz_courier_dropoff_syslog.errors import SyslogDropoffError
from ziggiz_courier_dropoff_syslog.model import (
    Facility,
    Severity,
    StructuredDataElement,
    SyslogMessage,
    create_rfc3164_message,
    create_rfc5424_message,
)
from ziggiz_courier_dropoff_syslog.serialization import SerializerFactory
from ziggiz_courier_dropoff_syslog.telemetry import configure_tracing, shutdown_tracing
from ziggiz_courier_dropoff_syslog.transport.udp import SyslogUdpSender


def setup_logging(log_level: str = "INFO", config: Optional[Config] = None) -> None:
    """
    Configure logging with appropriate formatters and handlers.

    Args:
        log_level: The logging level to set (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        config: Optional configuration object to use for logging setup
    """
    if config:
        configure_logging(config)
        return

    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Span export chatter from the SDK is only useful when debugging
    logging.getLogger("opentelemetry").setLevel(logging.WARNING)


def default_message_text() -> str:
    return f"Test message at {datetime.now():%Y-%m-%d %H:%M:%S}"


def build_message(config: Config, message_format: str, text: str) -> SyslogMessage:
    """
    Build the message for one wire format from the configured fields.

    Args:
        config: Configuration supplying app name, hostname, facility and so on
        message_format: "rfc3164" or "rfc5424"
        text: The message text

    Returns:
        The constructed SyslogMessage

    Raises:
        InvalidMessageError: If the configured fields do not form a valid message
    """
    facility = Facility.from_name(config.facility)
    severity = Severity.from_name(config.severity)
    if message_format == "rfc3164":
        return create_rfc3164_message(
            config.app_name,
            text,
            facility=facility,
            severity=severity,
            hostname=config.hostname,
        )
    return create_rfc5424_message(
        config.app_name,
        text,
        facility=facility,
        severity=severity,
        hostname=config.hostname,
        proc_id=config.proc_id,
        msg_id=config.msg_id,
        structured_data=[
            StructuredDataElement(id=element.id, params=element.params)
            for element in config.structured_data
        ],
    )


def send_messages(config: Config, text: Optional[str] = None) -> List[str]:
    """
    Send one message per configured wire format to the collector.

    Args:
        config: The configuration object
        text: Message text (default: "Test message at <now>")

    Returns:
        The rendered lines that were sent, in order

    Raises:
        InvalidMessageError: If a message cannot be serialized
        TransportError: If a datagram cannot be sent
    """
    logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")
    text = default_message_text() if text is None else text
    sent_lines = []

    with SyslogUdpSender(config.host, config.port, timeout=config.send_timeout) as sender:
        for message_format in config.formats:
            serializer = SerializerFactory.create_serializer(message_format)
            message = build_message(config, message_format, text)

            logger.info(f"Sending {message_format.upper()} syslog message: {text}")
            line = serializer.render(message)
            logger.info(line)

            sender.send_message(message, serializer)
            sent_lines.append(line)
            logger.info(
                f"{message_format.upper()} message was sent to syslog collector "
                f"{config.host}:{config.port}"
            )

    return sent_lines


def run_sender(config: Config, text: Optional[str] = None) -> None:
    """
    Send the configured messages, exiting with status 1 on failure.

    Args:
        config: The configuration object
        text: Optional message text
    """
    logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")

    if config.enable_tracing:
        configure_tracing()
    try:
        send_messages(config, text)
    except SyslogDropoffError as e:
        logger.error(f"Failed to send the message to syslog: {e}")
        sys.exit(1)
    finally:
        shutdown_tracing()


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """
    Return a new, re-validated Config with command line values applied.
    """
    overrides: Dict[str, Any] = {}
    for option, field in (
        ("log_level", "log_level"),
        ("host", "host"),
        ("port", "port"),
        ("format", "message_format"),
        ("app_name", "app_name"),
        ("hostname", "hostname"),
        ("facility", "facility"),
        ("severity", "severity"),
        ("proc_id", "proc_id"),
        ("msg_id", "msg_id"),
        ("send_timeout", "send_timeout"),
    ):
        value = getattr(args, option, None)
        if value is not None:
            overrides[field] = value
    if getattr(args, "enable_tracing", False):
        overrides["enable_tracing"] = True
    if not overrides:
        return config
    return Config(**{**config.model_dump(), **overrides})


def main() -> None:
    """
    Main entry point for the syslog sender.
    Parses command-line arguments, sets up logging, and sends the messages.
    """
    parser = argparse.ArgumentParser(description="Ziggiz Courier Syslog Sender")
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides config file)",
    )
    parser.add_argument(
        "--host",
        type=str,
        help="Syslog collector address (overrides config file)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Syslog collector UDP port (overrides config file)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["rfc3164", "rfc5424", "both"],
        help="Wire format to send (rfc3164, rfc5424, or both, overrides config file)",
    )
    parser.add_argument(
        "--app-name",
        type=str,
        help="APP-NAME / TAG of the messages (overrides config file)",
    )
    parser.add_argument(
        "--hostname",
        type=str,
        help="HOSTNAME of the messages (overrides config file)",
    )
    parser.add_argument(
        "--facility",
        type=str,
        help="Facility keyword, e.g. user or local0 (overrides config file)",
    )
    parser.add_argument(
        "--severity",
        type=str,
        help="Severity keyword, e.g. info or warning (overrides config file)",
    )
    parser.add_argument(
        "--proc-id",
        type=str,
        help="PROCID for RFC 5424 messages (overrides config file)",
    )
    parser.add_argument(
        "--msg-id",
        type=str,
        help="MSGID for RFC 5424 messages (overrides config file)",
    )
    parser.add_argument(
        "--send-timeout",
        type=float,
        help="Socket send timeout in seconds (overrides config file)",
    )
    parser.add_argument(
        "--enable-tracing",
        action="store_true",
        help="Export send spans to the console",
    )
    parser.add_argument(
        "--message",
        type=str,
        help='Message text (default: "Test message at <now>")',
    )

    args = parser.parse_args()

    try:
        config = apply_overrides(
            load_config(args.config if args.config else None), args
        )

        setup_logging(config=config)
        logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")

        if args.config:
            logger.info(f"Loaded configuration from {args.config}")
        else:
            logger.info("Using default or automatically detected configuration")

        run_sender(config, args.message)
    except KeyboardInterrupt:
        logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")
        logger.info("Sending interrupted by user")
    except Exception as e:
        # Setup basic logging if we couldn't load the configuration
        if not logging.root.handlers:
            setup_logging("ERROR")
        logger = logging.getLogger("ziggiz_courier_dropoff_syslog.main")
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
