# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# RFC 5424 (structured syslog) serializer
#
# Format: <PRI>1 TIMESTAMP HOSTNAME APP-NAME PROCID MSGID STRUCTURED-DATA [BOM MSG]
#
# Header fields must be printable US-ASCII. Absent PROCID and MSGID render as
# the NILVALUE "-". When MSG is empty the line ends after STRUCTURED-DATA with
# no trailing space.

# Standard library imports
import re

from datetime import datetime, timedelta
from typing import Iterable, Optional, Set

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import InvalidMessageError
from ziggiz_courier_dropoff_syslog.model import StructuredDataElement, SyslogMessage
from ziggiz_courier_dropoff_syslog.serialization.base import SyslogMessageSerializer

NILVALUE = "-"
UTF8_BOM = "\ufeff"

HOSTNAME_MAX_LENGTH = 255
APP_NAME_MAX_LENGTH = 48
PROCID_MAX_LENGTH = 128
MSGID_MAX_LENGTH = 32
SD_NAME_MAX_LENGTH = 32

SD_NAME_FORBIDDEN_CHARS = frozenset('= ]"\\')
_PARAM_VALUE_SPECIAL = re.compile(r'(["\\\]])')


def _is_printable_usascii(value: str) -> bool:
    return all(33 <= ord(ch) <= 126 for ch in value)


def format_rfc5424_timestamp(timestamp: datetime) -> str:
    """
    Format a timezone-aware timestamp as RFC 3339 with microseconds,
    e.g. 2021-03-04T13:22:01.123456+02:00.

    Raises:
        InvalidMessageError: If the UTC offset has a seconds component, which
            RFC 3339 cannot express.
    """
    offset = timestamp.utcoffset()
    if offset is not None and offset % timedelta(minutes=1):
        raise InvalidMessageError(
            f"UTC offset {offset} of timestamp {timestamp} is not a whole number of minutes"
        )
    return timestamp.isoformat(timespec="microseconds")


def escape_param_value(value: str) -> str:
    """
    Escape the characters RFC 5424 reserves inside PARAM-VALUE: '"', '\\' and ']'.
    """
    return _PARAM_VALUE_SPECIAL.sub(r"\\\1", value)


def validate_sd_name(kind: str, name: str) -> None:
    """
    Check an SD-ID or PARAM-NAME against the SD-NAME grammar.

    Raises:
        InvalidMessageError: If the name is empty, contains '=', space, ']',
            '"' or '\\', is not printable US-ASCII, or exceeds 32 characters.
    """
    if not name:
        raise InvalidMessageError(f"{kind} must not be empty")
    forbidden = SD_NAME_FORBIDDEN_CHARS.intersection(name)
    if forbidden:
        raise InvalidMessageError(
            f"{kind} {name!r} contains forbidden characters: "
            f"{''.join(sorted(forbidden))!r}"
        )
    if not _is_printable_usascii(name):
        raise InvalidMessageError(f"{kind} {name!r} must be printable US-ASCII")
    if len(name) > SD_NAME_MAX_LENGTH:
        raise InvalidMessageError(
            f"{kind} {name!r} exceeds {SD_NAME_MAX_LENGTH} characters"
        )


def render_sd_element(element: StructuredDataElement) -> str:
    """Render one SD-ELEMENT as [id name="value" ...]."""
    validate_sd_name("SD-ID", element.id)
    parts = [element.id]
    for name, value in element.params:
        validate_sd_name("PARAM-NAME", name)
        parts.append(f'{name}="{escape_param_value(value)}"')
    return "[" + " ".join(parts) + "]"


def render_structured_data(elements: Iterable[StructuredDataElement]) -> str:
    """
    Render the STRUCTURED-DATA field; an empty sequence renders as "-".

    Raises:
        InvalidMessageError: If an element is malformed or an SD-ID repeats.
    """
    rendered = []
    seen: Set[str] = set()
    for element in elements:
        if element.id in seen:
            raise InvalidMessageError(f"SD-ID {element.id!r} appears more than once")
        seen.add(element.id)
        rendered.append(render_sd_element(element))
    return "".join(rendered) if rendered else NILVALUE


def render_header_field(name: str, value: Optional[str], max_length: int) -> str:
    """
    Render an optional header field, substituting NILVALUE when it is empty.

    Raises:
        InvalidMessageError: If the value is not printable US-ASCII or is too long.
    """
    if not value:
        return NILVALUE
    if not _is_printable_usascii(value):
        raise InvalidMessageError(f"{name} {value!r} must be printable US-ASCII")
    if len(value) > max_length:
        raise InvalidMessageError(f"{name} {value!r} exceeds {max_length} characters")
    return value


class SyslogRFC5424Serializer(SyslogMessageSerializer):
    """
    Serializer for the structured syslog format with STRUCTURED-DATA support.
    """

    format_name = "rfc5424"
    VERSION = 1

    def render(self, message: SyslogMessage) -> str:
        self.validate_required_fields(message)
        header = " ".join(
            [
                f"<{message.priority}>{self.VERSION}",
                format_rfc5424_timestamp(message.timestamp),
                render_header_field(
                    "HOSTNAME", message.hostname, HOSTNAME_MAX_LENGTH
                ),
                render_header_field(
                    "APP-NAME", message.app_name, APP_NAME_MAX_LENGTH
                ),
                render_header_field("PROCID", message.proc_id, PROCID_MAX_LENGTH),
                render_header_field("MSGID", message.msg_id, MSGID_MAX_LENGTH),
                render_structured_data(message.structured_data),
            ]
        )
        if not message.message:
            return header
        return f"{header} {UTF8_BOM}{message.message}"
