# -*- coding: utf-8 -*-
# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# OpenTelemetry setup for Ziggiz Courier Dropoff Syslog
#
# Senders always create spans through get_tracer(). Until configure_tracing()
# installs a provider, the OpenTelemetry API hands out a no-op tracer.

# Standard library imports
from typing import Optional

# Third-party imports
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.trace import Tracer

SERVICE_NAME = "ziggiz-courier-dropoff-syslog"

_tracer_provider: Optional[TracerProvider] = None


def configure_tracing(exporter: Optional[SpanExporter] = None) -> TracerProvider:
    """
    Install a tracer provider for the dropoff service.

    Args:
        exporter: Span exporter to use. Defaults to the console exporter for
            development; pass an OTLP exporter in production.

    Returns:
        The installed TracerProvider. Repeated calls return the same provider
        until shutdown_tracing() is called.
    """
    global _tracer_provider
    if _tracer_provider is not None:
        return _tracer_provider

    resource = Resource.create({"service.name": SERVICE_NAME})
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(
        BatchSpanProcessor(exporter or ConsoleSpanExporter())
    )
    trace.set_tracer_provider(tracer_provider)
    _tracer_provider = tracer_provider
    return tracer_provider


def shutdown_tracing() -> None:
    """Flush pending spans and shut the provider down, if one was installed."""
    global _tracer_provider
    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        _tracer_provider = None


def get_tracer() -> Tracer:
    # The global provider can only be set once per process
    if _tracer_provider is not None:
        return _tracer_provider.get_tracer(SERVICE_NAME)
    return trace.get_tracer(SERVICE_NAME)
