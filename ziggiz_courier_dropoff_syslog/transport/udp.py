# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# UDP transport for sending rendered syslog messages


# Standard library imports
import logging
import socket

from types import TracebackType
from typing import Any, Optional, Tuple, Type

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import TransportError
from ziggiz_courier_dropoff_syslog.model import SyslogMessage
from ziggiz_courier_dropoff_syslog.serialization.base import SyslogMessageSerializer
from ziggiz_courier_dropoff_syslog.telemetry import get_tracer


def resolve_udp_address(host: str, port: int) -> Tuple[int, Tuple[Any, ...]]:
    """
    Resolve a collector address for datagram use.

    Args:
        host: Host name, IPv4 or IPv6 address of the collector
        port: UDP port of the collector

    Returns:
        A tuple of (address family, socket address) for the first result

    Raises:
        TransportError: If the address cannot be resolved
    """
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
    except OSError as e:
        raise TransportError(f"Cannot resolve syslog collector {host}:{port}: {e}") from e
    if not infos:
        raise TransportError(f"No address found for syslog collector {host}:{port}")
    family, _, _, _, sockaddr = infos[0]
    return family, sockaddr


class SyslogUdpSender:
    """
    Send rendered syslog messages to a remote collector over UDP.

    Each call to send() transmits one datagram; there is no acknowledgment and
    no retry. The socket is not connected to the collector and is only used
    for sending.

    Instances are not thread-safe. Callers sharing a sender between threads
    must serialise access to it.

    Example:
        with SyslogUdpSender("collector.example", 514) as sender:
            sender.send_message(message, SyslogRFC5424Serializer())
    """

    def __init__(self, host: str, port: int = 514, timeout: Optional[float] = None):
        """
        Initialize the UDP sender. No socket is created until open() is called.

        Args:
            host: Collector host name or address
            port: Collector UDP port (default: 514)
            timeout: Optional send timeout in seconds
        """
        self.logger = logging.getLogger("ziggiz_courier_dropoff_syslog.transport.udp")
        self.host = host
        self.port = port
        self.timeout = timeout
        self.sock: Optional[socket.socket] = None
        self.remote_address: Optional[Tuple[Any, ...]] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self.sock is not None

    def open(self) -> "SyslogUdpSender":
        """
        Resolve the collector address and create the datagram socket.

        Returns:
            The sender itself, to allow chaining

        Raises:
            TransportError: If the sender was closed, the address cannot be
                resolved or the socket cannot be created
        """
        if self._closed:
            raise TransportError("Cannot reopen a closed syslog sender")
        if self.sock is not None:
            return self

        family, sockaddr = resolve_udp_address(self.host, self.port)
        try:
            sock = socket.socket(family, socket.SOCK_DGRAM)
        except OSError as e:
            raise TransportError(f"Cannot create UDP socket: {e}") from e
        if self.timeout is not None:
            try:
                sock.settimeout(self.timeout)
            except (OSError, ValueError) as e:
                sock.close()
                raise TransportError(
                    f"Invalid send timeout {self.timeout!r}: {e}"
                ) from e

        self.sock = sock
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
        Transmit one rendered message as a single datagram.

        Args:
            data: The serialized message

        Raises:
            TransportError: If the sender is not open or the network layer
                refuses the datagram
        """
        if self.sock is None or self.remote_address is None:
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
            try:
                sent = self.sock.sendto(data, self.remote_address)
            except OSError as e:
                raise TransportError(
                    f"Failed to send syslog datagram to {self.host}:{self.port}: {e}"
                ) from e
            if sent != len(data):
                raise TransportError(
                    f"Partial syslog datagram sent to {self.host}:{self.port}: "
                    f"{sent} of {len(data)} bytes"
                )

    def send_message(
        self, message: SyslogMessage, serializer: SyslogMessageSerializer
    ) -> None:
        """
        Serialize a message and transmit it.

        Serialization completes before anything is sent, so an invalid message
        never produces a partial datagram.

        Raises:
            InvalidMessageError: If the serializer rejects the message
            TransportError: If the datagram cannot be sent
        """
        self.send(serializer.serialize(message))

    def close(self) -> None:
        """
        Release the socket. Calling close() more than once has no effect.
        """
        self._closed = True
        sock, self.sock = self.sock, None
        if sock is None:
            return
        sock.close()
        self.logger.debug(
            "UDP syslog sender closed",
            extra={
                "net.transport": "ip_udp",
                "net.peer.name": self.host,
                "net.peer.port": self.port,
            },
        )

    def __enter__(self) -> "SyslogUdpSender":
        return self.open()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
