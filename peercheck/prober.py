#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 16:12:58 krylon>
#
# /data/code/python/peercheck/prober.py
# created on 13. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.prober

(c) 2026 Benjamin Walkenhorst

Probing a Peer means connecting to it and measuring how long it took to
establish the connection. No data is exchanged, and for tls:// peers we
only check the TCP connection, not the TLS handshake.
"""

import asyncio
import logging
import socket
import ssl
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, Final, Optional

from aioquic.asyncio import connect
from aioquic.quic.configuration import QuicConfiguration

from peercheck import common
from peercheck.common import PeerError
from peercheck.model import Peer, ProbeResult, Protocol
from peercheck.resolver import AddressResolver, ResolutionError


class DialError(PeerError):
    """DialError indicates a connection attempt failed or timed out."""


Dialer = Callable[[str, int, float], timedelta]


def dial_tcp(addr: str, port: int, timeout: float) -> timedelta:
    """Open a TCP connection to <addr>:<port>, close it, return the time it took."""
    try:
        start: Final[float] = time.perf_counter()
        with socket.create_connection((addr, port), timeout=timeout):
            elapsed: float = time.perf_counter() - start
    except OSError as err:
        raise DialError(f"{err.__class__.__name__} connecting to {addr}:{port} - {err}") \
            from err
    return timedelta(seconds=elapsed)


async def _quic_handshake(addr: str, port: int, timeout: float) -> float:
    cfg = QuicConfiguration(is_client=True,
                            alpn_protocols=list(common.quic_alpn),
                            verify_mode=ssl.CERT_NONE)

    elapsed: Optional[float] = None
    start: Final[float] = time.perf_counter()

    # One deadline for the handshake and for closing the connection again.
    try:
        async with asyncio.timeout(timeout):
            async with connect(addr, port, configuration=cfg):
                elapsed = time.perf_counter() - start
    except TimeoutError:
        if elapsed is None:
            raise

    return elapsed


def dial_quic(addr: str, port: int, timeout: float) -> timedelta:
    """Perform a QUIC handshake with <addr>:<port>, return the time it took.

    The server's certificate is not verified, we only want to know if there is
    something speaking QUIC on the other end.
    """
    try:
        elapsed = asyncio.run(_quic_handshake(addr, port, timeout))
    except OSError as err:  # includes ConnectionError and TimeoutError
        raise DialError(f"{err.__class__.__name__} connecting to {addr}:{port} - {err}") \
            from err
    return timedelta(seconds=elapsed)


dialers: Final[dict[Protocol, Dialer]] = {
    Protocol.TCP: dial_tcp,
    Protocol.TLS: dial_tcp,
    Protocol.QUIC: dial_quic,
}


@dataclass(kw_only=True, slots=True)
class Prober:
    """Prober checks if Peers are reachable."""

    log: logging.Logger = field(default_factory=lambda: common.get_logger("prober"))
    timeout: float = common.conn_timeout
    resolver: AddressResolver = field(init=False)

    def __post_init__(self) -> None:
        assert self.timeout > 0
        self.resolver = AddressResolver(timeout=self.timeout)

    def dial(self, peer: Peer, addr: str) -> ProbeResult:
        """Connect to <peer> at <addr> and return the outcome."""
        dialer: Optional[Dialer] = dialers.get(peer.protocol)
        if dialer is None:
            self.log.debug("Don't know how to probe %s over %s",
                           peer.uri,
                           peer.protocol)
            return ProbeResult.down()

        try:
            latency = dialer(addr, peer.port, self.timeout)
        except DialError as err:
            self.log.debug("%s is down: %s",
                           peer.uri,
                           err)
            return ProbeResult.down()

        self.log.debug("%s is up, latency %s",
                       peer.uri,
                       latency)
        return ProbeResult.up(latency)

    def probe(self, peer: Peer) -> ProbeResult:
        """Probe <peer>, record the outcome on it and return it."""
        try:
            addr: str = self.resolver.resolve(peer.host)
        except ResolutionError as err:
            self.log.debug("Cannot resolve %s: %s",
                           peer.uri,
                           err)
            res = ProbeResult.down()
        else:
            res = self.dial(peer, addr)

        peer.record(res)
        return res


def probe(peer: Peer, timeout: float = common.conn_timeout) -> ProbeResult:
    """Probe a single Peer."""
    p: Prober = Prober(timeout=timeout)
    return p.probe(peer)


# Local Variables: #
# python-indent: 4 #
# End: #
