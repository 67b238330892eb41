# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Serializer factory for selecting a syslog wire format by name
#
# Supported serializer types:
#   - rfc3164: SyslogRFC3164Serializer, BSD-style lines
#   - rfc5424: SyslogRFC5424Serializer, structured lines with SD-ELEMENTs

# Standard library imports
from typing import Dict, List, Type

# Local/package imports
from ziggiz_courier_dropoff_syslog.serialization.base import SyslogMessageSerializer
from ziggiz_courier_dropoff_syslog.serialization.rfc3164 import (
    SyslogRFC3164Serializer,
)
from ziggiz_courier_dropoff_syslog.serialization.rfc5424 import (
    SyslogRFC5424Serializer,
)


class SerializerFactory:
    """
    Factory class for creating syslog message serializers.

    The caller chooses the wire format; the message itself does not decide it.
    Serializers hold no state, so each call may share or create an instance.
    """

    SERIALIZERS: Dict[str, Type[SyslogMessageSerializer]] = {
        SyslogRFC3164Serializer.format_name: SyslogRFC3164Serializer,
        SyslogRFC5424Serializer.format_name: SyslogRFC5424Serializer,
    }

    @classmethod
    def available_formats(cls) -> List[str]:
        return list(cls.SERIALIZERS)

    @classmethod
    def create_serializer(cls, serializer_type: str) -> SyslogMessageSerializer:
        """
        Create a serializer instance for the given format name.

        Args:
            serializer_type: "rfc3164" or "rfc5424" (case-insensitive)

        Returns:
            A serializer instance

        Raises:
            ValueError: If the format name is not supported
        """
        serializer_class = cls.SERIALIZERS.get(serializer_type.lower())
        if serializer_class is None:
            raise ValueError(
                f"Invalid serializer type: {serializer_type}. "
                f"Must be one of {cls.available_formats()}"
            )
        return serializer_class()
