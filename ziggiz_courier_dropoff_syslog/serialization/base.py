# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Abstract base class for syslog wire-format serializers

# Standard library imports
from abc import ABC, abstractmethod

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import InvalidMessageError
from ziggiz_courier_dropoff_syslog.model import SyslogMessage

WIRE_ENCODING = "utf-8"


class SyslogMessageSerializer(ABC):
    """
    Abstract base class for rendering a SyslogMessage into one wire line.

    Subclasses implement render(); serialize() encodes the rendered line for
    the transport. Neither method appends a trailing newline: on UDP the
    datagram boundary is the message boundary.
    """

    #: Short name used by SerializerFactory and the configuration file
    format_name: str = ""

    @abstractmethod
    def render(self, message: SyslogMessage) -> str:
        """
        Render the message as a single line of text.

        Raises:
            InvalidMessageError: If the message cannot be represented in this format.
        """

    def serialize(self, message: SyslogMessage) -> bytes:
        """
        Render the message and encode it as UTF-8 ready for transmission.
        """
        return self.render(message).encode(WIRE_ENCODING)

    @staticmethod
    def validate_required_fields(message: SyslogMessage) -> None:
        """
        Check the fields both formats require.

        Raises:
            InvalidMessageError: If the hostname or app name is empty, or the
                hostname contains whitespace.
        """
        if not message.hostname:
            raise InvalidMessageError("HOSTNAME must not be empty")
        if any(ch.isspace() for ch in message.hostname):
            raise InvalidMessageError(
                f"HOSTNAME must not contain whitespace: {message.hostname!r}"
            )
        if not message.app_name:
            raise InvalidMessageError("APP-NAME must not be empty")
