# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Syslog message model
#
# This module defines the immutable message model shared by the RFC 3164 and
# RFC 5424 serializers, the facility and severity enumerations, and helpers to
# compute and decode the PRI value.

# Standard library imports
import socket

from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

# Third-party imports
from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    ValidationError,
    field_validator,
)

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import InvalidMessageError


class Facility(IntEnum):
    """
    Syslog facility codes (RFC 5424 section 6.2.1).
    """

    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    SECURITY = 13
    CONSOLE = 14
    SOLARIS_CRON = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23

    @classmethod
    def from_name(cls, name: str) -> "Facility":
        """
        Resolve a facility keyword such as "user", "local0" or "solaris-cron".

        Raises:
            ValueError: If the keyword is not a known facility.
        """
        key = _normalize_keyword(name)
        if key in _FACILITY_ALIASES:
            return _FACILITY_ALIASES[key]
        try:
            return cls[key.upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown syslog facility: {name}") from None

    @property
    def keyword(self) -> str:
        return self.name.lower().replace("_", "-")


class Severity(IntEnum):
    """
    Syslog severity levels (RFC 5424 section 6.2.1).
    """

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """
        Resolve a severity keyword such as "info", "err" or "warning".

        Raises:
            ValueError: If the keyword is not a known severity.
        """
        key = _normalize_keyword(name)
        if key in _SEVERITY_ALIASES:
            return _SEVERITY_ALIASES[key]
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError(f"Unknown syslog severity: {name}") from None

    @property
    def keyword(self) -> str:
        return self.name.lower()


# Short names used by syslog.conf and the logger(1) utility
_FACILITY_ALIASES: Dict[str, Facility] = {
    "kernel": Facility.KERN,
    "log-audit": Facility.SECURITY,
    "log-alert": Facility.CONSOLE,
    "clock": Facility.SOLARIS_CRON,
}

_SEVERITY_ALIASES: Dict[str, Severity] = {
    "emerg": Severity.EMERGENCY,
    "panic": Severity.EMERGENCY,
    "crit": Severity.CRITICAL,
    "err": Severity.ERROR,
    "warn": Severity.WARNING,
    "info": Severity.INFORMATIONAL,
}

MAX_PRIORITY = Facility.LOCAL7 * 8 + Severity.DEBUG


def _normalize_keyword(name: str) -> str:
    return name.strip().lower().replace("_", "-")


def compute_priority(facility: Facility, severity: Severity) -> int:
    """
    Compute the PRI value carried in angle brackets at the start of a message.
    """
    return int(facility) * 8 + int(severity)


def decode_priority(priority: int) -> Tuple[Facility, Severity]:
    """
    Split a PRI value back into its facility and severity.

    Raises:
        InvalidMessageError: If the value is outside 0..191.
    """
    if not 0 <= priority <= MAX_PRIORITY:
        raise InvalidMessageError(
            f"PRI value {priority} is out of range (0..{MAX_PRIORITY})"
        )
    return Facility(priority >> 3), Severity(priority & 0x07)


class StructuredDataElement(BaseModel):
    """
    One RFC 5424 SD-ELEMENT.

    Attributes:
        id (str): The SD-ID, conventionally "name@enterpriseNumber".
        params (Tuple[Tuple[str, str], ...]): Parameter (name, value) pairs, rendered
            in order. A mapping is accepted on construction and stored as pairs
            so that a built element cannot change.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    params: Tuple[Tuple[str, str], ...] = ()

    @field_validator("params", mode="before")
    @classmethod
    def stringify_params(cls, v: Any) -> Any:
        """Render parameter names and values as strings, keeping their order."""
        if v is None:
            return ()
        if isinstance(v, Mapping):
            v = v.items()
        elif not isinstance(v, (list, tuple)):
            return v
        pairs = []
        for item in v:
            if isinstance(item, (list, tuple)) and len(item) == 2:
                item = (str(item[0]), str(item[1]))
            pairs.append(item)
        return tuple(pairs)


StructuredDataInput = Union[StructuredDataElement, Tuple[str, Mapping[str, Any]]]


class SyslogMessage(BaseModel):
    """
    A single syslog event, fully specified at construction and never mutated.

    The same model serves both wire formats. The RFC 3164 serializer ignores
    proc_id, msg_id and structured_data.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    facility: Facility
    severity: Severity
    hostname: str
    app_name: str
    message: str = ""
    proc_id: Optional[str] = None
    msg_id: Optional[str] = None
    structured_data: Tuple[StructuredDataElement, ...] = ()

    @field_validator("message", mode="before")
    @classmethod
    def default_message(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("structured_data", mode="before")
    @classmethod
    def coerce_structured_data(cls, v: Any) -> Any:
        """Accept (id, params) pairs alongside StructuredDataElement instances."""
        if v is None:
            return ()
        if not isinstance(v, (list, tuple)):
            return v
        elements = []
        for item in v:
            if isinstance(item, (tuple, list)) and len(item) == 2:
                item = StructuredDataElement(id=item[0], params=item[1])
            elements.append(item)
        return tuple(elements)

    @property
    def priority(self) -> int:
        return compute_priority(self.facility, self.severity)


def _build_message(
    timestamp: Optional[datetime], hostname: Optional[str], **fields: Any
) -> SyslogMessage:
    if timestamp is None:
        timestamp = datetime.now().astimezone()
    if hostname is None:
        hostname = socket.gethostname()
    try:
        return SyslogMessage(timestamp=timestamp, hostname=hostname, **fields)
    except ValidationError as e:
        raise InvalidMessageError(f"Invalid syslog message: {e}") from e


def create_rfc3164_message(
    app_name: str,
    message: str = "",
    *,
    timestamp: Optional[datetime] = None,
    facility: Facility = Facility.USER,
    severity: Severity = Severity.INFORMATIONAL,
    hostname: Optional[str] = None,
) -> SyslogMessage:
    """
    Build a message carrying the fields of the BSD (RFC 3164) format.

    Args:
        app_name: Application name, used as the TAG
        message: The CONTENT text
        timestamp: Timezone-aware time of the event (default: now, local offset)
        facility: Originating facility (default: USER)
        severity: Severity level (default: INFORMATIONAL)
        hostname: Originating host (default: this machine's name)

    Returns:
        The constructed SyslogMessage

    Raises:
        InvalidMessageError: If a field fails validation, e.g. a naive timestamp.
    """
    return _build_message(
        timestamp,
        hostname,
        facility=facility,
        severity=severity,
        app_name=app_name,
        message=message,
    )


def create_rfc5424_message(
    app_name: str,
    message: str = "",
    *,
    timestamp: Optional[datetime] = None,
    facility: Facility = Facility.USER,
    severity: Severity = Severity.INFORMATIONAL,
    hostname: Optional[str] = None,
    proc_id: Optional[str] = None,
    msg_id: Optional[str] = None,
    structured_data: Iterable[StructuredDataInput] = (),
) -> SyslogMessage:
    """
    Build a message carrying the fields of the structured (RFC 5424) format.

    Accepts the same arguments as create_rfc3164_message plus the PROCID,
    MSGID and STRUCTURED-DATA fields. Structured data may be given as
    StructuredDataElement instances or (id, params) pairs.

    Raises:
        InvalidMessageError: If a field fails validation.
    """
    return _build_message(
        timestamp,
        hostname,
        facility=facility,
        severity=severity,
        app_name=app_name,
        message=message,
        proc_id=proc_id,
        msg_id=msg_id,
        structured_data=tuple(structured_data),
    )
