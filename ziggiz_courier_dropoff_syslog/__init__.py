# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# ziggiz_courier_dropoff_syslog package
#
# This is the package initializer for the Ziggiz Courier Dropoff Syslog sender.
# It builds syslog messages, renders them in the RFC 3164 or RFC 5424 wire
# format and sends them to a remote collector over UDP.

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import (
    InvalidMessageError,
    SyslogDropoffError,
    TransportError,
)
from ziggiz_courier_dropoff_syslog.model import (
    Facility,
    Severity,
    StructuredDataElement,
    SyslogMessage,
    compute_priority,
    create_rfc3164_message,
    create_rfc5424_message,
    decode_priority,
)
from ziggiz_courier_dropoff_syslog.serialization import (
    SerializerFactory,
    SyslogMessageSerializer,
    SyslogRFC3164Serializer,
    SyslogRFC5424Serializer,
)
from ziggiz_courier_dropoff_syslog.transport import (
    AsyncSyslogUdpSender,
    SyslogUdpSender,
)

__all__ = [
    "AsyncSyslogUdpSender",
    "Facility",
    "InvalidMessageError",
    "SerializerFactory",
    "Severity",
    "StructuredDataElement",
    "SyslogDropoffError",
    "SyslogMessage",
    "SyslogMessageSerializer",
    "SyslogRFC3164Serializer",
    "SyslogRFC5424Serializer",
    "SyslogUdpSender",
    "TransportError",
    "compute_priority",
    "create_rfc3164_message",
    "create_rfc5424_message",
    "decode_priority",
]
