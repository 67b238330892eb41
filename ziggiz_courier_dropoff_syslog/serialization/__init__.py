# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Syslog wire-format serializers (RFC 3164 and RFC 5424)

# Local/package imports
from ziggiz_courier_dropoff_syslog.serialization.base import SyslogMessageSerializer
from ziggiz_courier_dropoff_syslog.serialization.rfc3164 import (
    SyslogRFC3164Serializer,
)
from ziggiz_courier_dropoff_syslog.serialization.rfc5424 import (
    SyslogRFC5424Serializer,
)
from ziggiz_courier_dropoff_syslog.serialization.serializer_factory import (
    SerializerFactory,
)

__all__ = [
    "SerializerFactory",
    "SyslogMessageSerializer",
    "SyslogRFC3164Serializer",
    "SyslogRFC5424Serializer",
]
