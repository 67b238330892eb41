# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# RFC 3164 (BSD syslog) serializer
#
# Format: <PRI>MMM DD HH:MM:SS HOSTNAME TAG: CONTENT
#
# The TAG is the application name. CONTENT is copied verbatim; callers are
# responsible for keeping newlines and control characters out of it.

# Standard library imports
from datetime import datetime

# Local/package imports
from ziggiz_courier_dropoff_syslog.model import SyslogMessage
from ziggiz_courier_dropoff_syslog.serialization.base import SyslogMessageSerializer

# Fixed English abbreviations; strftime("%b") follows the process locale
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def format_rfc3164_timestamp(timestamp: datetime) -> str:
    """
    Format a timestamp as "Mmm dd hh:mm:ss" with a space-padded day.

    The timestamp's own wall-clock time is used; the year and UTC offset are
    not part of the format.
    """
    month = MONTH_ABBREVIATIONS[timestamp.month - 1]
    return f"{month} {timestamp.day:2d} {timestamp:%H:%M:%S}"


class SyslogRFC3164Serializer(SyslogMessageSerializer):
    """
    Serializer for the legacy BSD syslog format.
    """

    format_name = "rfc3164"

    def render(self, message: SyslogMessage) -> str:
        self.validate_required_fields(message)
        timestamp = format_rfc3164_timestamp(message.timestamp)
        return (
            f"<{message.priority}>{timestamp} {message.hostname} "
            f"{message.app_name}: {message.message}"
        )
