#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 15:31:19 krylon>
#
# /data/code/python/peercheck/resolver.py
# created on 13. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.resolver

(c) 2026 Benjamin Walkenhorst
"""

import logging
from dataclasses import dataclass, field
from ipaddress import ip_address
from threading import local
from typing import Optional

from dns.exception import DNSException
from dns.resolver import HostAnswers, Resolver

from peercheck import common
from peercheck.common import PeerError


class ResolutionError(PeerError):
    """ResolutionError indicates a hostname could not be turned into an address."""


@dataclass(kw_only=True, slots=True)
class AddressResolver:
    """AddressResolver turns the host part of a peer URI into an IP address."""

    log: logging.Logger = field(default_factory=lambda: common.get_logger("resolver"))
    timeout: float = common.conn_timeout
    pool: local = field(default_factory=local)

    @property
    def res(self) -> Resolver:
        """Return the calling thread's Resolver."""
        try:
            return self.pool.res
        except AttributeError:
            r = Resolver()
            r.timeout = self.timeout
            r.lifetime = self.timeout
            self.pool.res = r
            return r

    def resolve(self, host: str) -> str:
        """Return an address to connect to for <host>.

        Bracketed IPv6 literals and bare IP addresses are returned without
        asking DNS. For hostnames, the first address of the lookup is
        returned, no matter the address family.
        """
        if host.startswith("[") and host.endswith("]"):
            return host[1:-1]

        try:
            return str(ip_address(host))
        except ValueError:
            pass

        try:
            answer: HostAnswers = self.res.resolve_name(host)
            addr: Optional[str] = next(answer.addresses(), None)
        except DNSException as err:
            cname = err.__class__.__name__
            raise ResolutionError(f"{cname} looking up {host}: {err}") from err

        if addr is None:
            raise ResolutionError(f"No address was found for {host}")

        self.log.debug("%s resolves to %s",
                       host,
                       addr)
        return addr


# Local Variables: #
# python-indent: 4 #
# End: #
