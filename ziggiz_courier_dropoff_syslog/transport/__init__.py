# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Datagram transports for delivering rendered syslog messages

# Local/package imports
from ziggiz_courier_dropoff_syslog.transport.async_udp import (
    AsyncSyslogUdpSender,
    SyslogUDPSenderProtocol,
)
from ziggiz_courier_dropoff_syslog.transport.udp import SyslogUdpSender

__all__ = [
    "AsyncSyslogUdpSender",
    "SyslogUDPSenderProtocol",
    "SyslogUdpSender",
]
