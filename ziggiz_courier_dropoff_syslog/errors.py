# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Exceptions raised by the syslog message model, serializers and senders


class SyslogDropoffError(Exception):
    """
    Base class for all errors raised by the dropoff package.
    """


class InvalidMessageError(SyslogDropoffError, ValueError):
    """
    Exception raised when a syslog message is missing a required field or
    carries characters the wire format does not allow.
    """


class TransportError(SyslogDropoffError):
    """
    Exception raised when a rendered message cannot be handed to the network.
    """
