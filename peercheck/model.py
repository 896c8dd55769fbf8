#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 14:40:12 krylon>
#
# /data/code/python/peercheck/model.py
# created on 12. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.model

(c) 2026 Benjamin Walkenhorst
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional

from peercheck.common import PeerError

usec: timedelta = timedelta(microseconds=1)


class ProbeError(PeerError):
    """ProbeError indicates a Peer was probed more than once."""


class Protocol(Enum):
    """Protocol is the transport a Peer is reachable over."""

    TCP = "tcp"
    TLS = "tls"
    QUIC = "quic"


@dataclass(kw_only=True, slots=True, frozen=True)
class ProbeResult:
    """ProbeResult is the outcome of probing a Peer."""

    reachable: bool
    latency: Optional[timedelta] = None

    @classmethod
    def down(cls) -> 'ProbeResult':
        """Return a result for a Peer that could not be reached."""
        return cls(reachable=False)

    @classmethod
    def up(cls, latency: timedelta) -> 'ProbeResult':
        """Return a result for a Peer that answered after <latency>."""
        return cls(reachable=True, latency=latency)


@dataclass(kw_only=True, slots=True)
class Peer:
    """Peer is a network endpoint advertised in the public peer list."""

    uri: str
    protocol: Protocol
    host: str
    port: int
    region: str = ""
    country: str = ""
    result: Optional[ProbeResult] = None

    def __post_init__(self) -> None:
        assert 0 < self.port < 65536, "Port must be a number between 1 and 65535"

    @property
    def location(self) -> str:
        """Return the region and country the Peer was listed under."""
        return f"{self.region}/{self.country}"

    @property
    def probed(self) -> bool:
        """Return True if a result has been recorded for the Peer."""
        return self.result is not None

    @property
    def up(self) -> bool:
        """Return True if the Peer was found to be reachable."""
        return self.result is not None and self.result.reachable

    @property
    def latency(self) -> Optional[timedelta]:
        """Return the time it took to connect to the Peer, if it is up."""
        if self.up:
            return self.result.latency  # type: ignore
        return None

    @property
    def latency_ms(self) -> Optional[float]:
        """Return the latency in milliseconds, with microsecond resolution."""
        lat = self.latency
        if lat is None:
            return None
        return (lat // usec) / 1000.0

    def record(self, res: ProbeResult) -> None:
        """Attach the outcome of a probe. A Peer can only be probed once."""
        if self.result is not None:
            raise ProbeError(f"Peer {self.uri} has already been probed")
        self.result = res


# Local Variables: #
# python-indent: 4 #
# End: #
