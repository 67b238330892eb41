# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# AsyncIO UDP transport for sending rendered syslog messages


# Standard library imports
import asyncio
import logging
import socket

from types import TracebackType
from typing import Any, Optional, Tuple, Type

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import TransportError
from ziggiz_courier_dropoff_syslog.model import SyslogMessage
from ziggiz_courier_dropoff_syslog.serialization.base import SyslogMessageSerializer
from ziggiz_courier_dropoff_syslog.telemetry import get_tracer


class SyslogUDPSenderProtocol(asyncio.DatagramProtocol):
    """
    Send-only datagram protocol backing AsyncSyslogUdpSender.

    The event loop reports send failures through error_received(). Failures
    raised while a send is in progress are captured so the sender can raise
    them; failures reported later are logged.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(
            "ziggiz_courier_dropoff_syslog.transport.async_udp"
        )
        self.transport: Optional[asyncio.DatagramTransport] = None
        self.send_error: Optional[Exception] = None
        self._send_in_progress = False
        self._closed: Optional[asyncio.Future] = None

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        """
        Called when the datagram endpoint is created.

        Args:
            transport: The transport for the endpoint
        """
        self.transport = transport  # type: ignore[assignment]
        self._closed = asyncio.get_running_loop().create_future()
        self.logger.debug(
            "UDP syslog sender endpoint created", extra={"net.transport": "ip_udp"}
        )

    def begin_send(self) -> None:
        self.send_error = None
        self._send_in_progress = True

    def end_send(self) -> Optional[Exception]:
        self._send_in_progress = False
        error, self.send_error = self.send_error, None
        return error

    def error_received(self, exc: Exception) -> None:
        """
        Called when a send operation raises an OSError.

        Args:
            exc: The exception that was raised
        """
        if self._send_in_progress:
            self.send_error = exc
            return
        self.logger.warning(
            "Deferred error on UDP syslog sender", extra={"error": str(exc)}
        )

    def connection_lost(self, exc: Optional[Exception]) -> None:
        """
        Called when the endpoint is closed.

        Args:
            exc: The exception that caused the close, or None on a normal close
        """
        if exc:
            self.logger.debug(
                "UDP syslog sender endpoint closed with error",
                extra={"net.transport": "ip_udp", "error": exc},
            )
        else:
            self.logger.debug(
                "UDP syslog sender endpoint closed",
                extra={"net.transport": "ip_udp"},
            )
        if self._closed is not None and not self._closed.done():
            self._closed.set_result(None)

    async def wait_closed(self) -> None:
        if self._closed is not None:
            await self._closed


class AsyncSyslogUdpSender:
    """
    Send rendered syslog messages over UDP from asyncio code.

    Mirrors SyslogUdpSender: open, send, close, with guaranteed release when
    used as an async context manager. send() hands the datagram to the event
    loop without awaiting; failures the loop reports immediately are raised as
    TransportError.
    """

    def __init__(self, host: str, port: int = 514):
        self.logger = logging.getLogger(
            "ziggiz_courier_dropoff_syslog.transport.async_udp"
        )
        self.host = host
        self.port = port
        self.transport: Optional[asyncio.DatagramTransport] = None
        self.protocol: Optional[SyslogUDPSenderProtocol] = None
        self.remote_address: Optional[Tuple[Any, ...]] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self.transport is not None

    async def open(self) -> "AsyncSyslogUdpSender":
        """
        Resolve the collector address and create the datagram endpoint.

        Raises:
            TransportError: If the sender was closed, or resolution or
                endpoint creation fails
        """
        if self._closed:
            raise TransportError("Cannot reopen a closed syslog sender")
        if self.transport is not None:
            return self

        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(self.host, self.port, type=socket.SOCK_DGRAM)
        except OSError as e:
            raise TransportError(
                f"Cannot resolve syslog collector {self.host}:{self.port}: {e}"
            ) from e
        if not infos:
            raise TransportError(
                f"No address found for syslog collector {self.host}:{self.port}"
            )
        family, _, _, _, sockaddr = infos[0]

        try:
            transport, protocol = await loop.create_datagram_endpoint(
                SyslogUDPSenderProtocol, family=family
            )
        except OSError as e:
            raise TransportError(f"Cannot create UDP endpoint: {e}") from e

        self.transport = transport
        self.protocol = protocol
        self.remote_address = sockaddr
        self.logger.debug(
            "UDP syslog sender opened",
            extra={
                "net.transport": "ip_udp",
                "net.peer.name": self.host,
                "net.peer.port": self.port,
            },
        )
        return self

    def send(self, data: bytes) -> None:
        """
        Hand one rendered message to the event loop as a single datagram.

        Raises:
            TransportError: If the sender is not open or the send fails
        """
        if (
            self.transport is None
            or self.protocol is None
            or self.transport.is_closing()
        ):
            state = "closed" if self._closed else "not open"
            raise TransportError(f"Cannot send on a syslog sender that is {state}")

        tracer = get_tracer()
        with tracer.start_as_current_span(
            "syslog.udp.send",
            attributes={
                "net.transport": "ip_udp",
                "net.peer.name": self.host,
                "net.peer.port": self.port,
                "message.length": len(data),
            },
        ):
            self.protocol.begin_send()
            try:
                self.transport.sendto(data, self.remote_address)
            except (OSError, ValueError) as e:
                raise TransportError(
                    f"Failed to send syslog datagram to {self.host}:{self.port}: {e}"
                ) from e
            finally:
                error = self.protocol.end_send()
            if error is not None:
                raise TransportError(
                    f"Failed to send syslog datagram to {self.host}:{self.port}: {error}"
                ) from error

    def send_message(
        self, message: SyslogMessage, serializer: SyslogMessageSerializer
    ) -> None:
        """
        Serialize a message and send it; serialization errors are raised first.
        """
        self.send(serializer.serialize(message))

    async def close(self) -> None:
        """
        Close the endpoint and wait for the loop to release it. Idempotent.
        """
        self._closed = True
        transport, self.transport = self.transport, None
        protocol, self.protocol = self.protocol, None
        if transport is None:
            return
        transport.close()
        if protocol is not None:
            await protocol.wait_closed()
        self.logger.debug(
            "UDP syslog sender closed",
            extra={
                "net.transport": "ip_udp",
                "net.peer.name": self.host,
                "net.peer.port": self.port,
            },
        )

    async def __aenter__(self) -> "AsyncSyslogUdpSender":
        return await self.open()

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()
