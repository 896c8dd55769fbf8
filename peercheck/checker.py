#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 16:47:31 krylon>
#
# /data/code/python/peercheck/checker.py
# created on 14. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.checker

(c) 2026 Benjamin Walkenhorst
"""

import logging
import traceback
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass, field
from threading import BoundedSemaphore, Thread
from typing import Final, Optional, Sequence

from peercheck import common
from peercheck.model import Peer, ProbeResult
from peercheck.prober import Prober


@dataclass(kw_only=True, slots=True)
class Checker:
    """Checker probes many Peers in parallel, one thread per Peer.

    Each thread only ever touches its own Peer, so the results need no
    locking. probe_all returns after every thread has finished.
    """

    log: logging.Logger = field(default_factory=lambda: common.get_logger("checker"))
    timeout: float = common.conn_timeout
    wcnt: int = 0  # maximum number of probes in flight, 0 means no limit
    prober: Optional[Prober] = None

    def __post_init__(self) -> None:
        assert self.wcnt >= 0
        if self.prober is None:
            self.prober = Prober(timeout=self.timeout)

    def _probe_worker(self, wid: int, peer: Peer, gate: AbstractContextManager) -> None:
        try:
            with gate:
                self.prober.probe(peer)  # type: ignore
        except Exception as err:  # pylint: disable-msg=W0718
            cname: Final[str] = err.__class__.__name__
            self.log.error("%s in probe_%04d for %s: %s\n%s\n",
                           cname,
                           wid,
                           peer.uri,
                           err,
                           "\n".join(traceback.format_exception(err)))
            if not peer.probed:
                peer.record(ProbeResult.down())

    def probe_all(self, peers: Sequence[Peer]) -> None:
        """Probe all <peers> and wait for the results."""
        gate: AbstractContextManager = \
            BoundedSemaphore(self.wcnt) if self.wcnt > 0 else nullcontext()
        workers: list[Thread] = []

        self.log.debug("Probing %d peers, timeout %.1f s",
                       len(peers),
                       self.timeout)

        for idx, peer in enumerate(peers):
            w: Thread = Thread(target=self._probe_worker,
                               name=f"probe_{idx:04d}",
                               args=(idx, peer, gate),
                               daemon=False)
            workers.append(w)
            w.start()

        for w in workers:
            w.join()

        self.log.debug("Finished probing %d peers, %d are up.",
                       len(peers),
                       sum(1 for p in peers if p.up))


def probe_all(peers: Sequence[Peer], timeout: float = common.conn_timeout) -> None:
    """Probe all <peers> in parallel and wait for the results."""
    c: Checker = Checker(timeout=timeout)
    c.probe_all(peers)


# Local Variables: #
# python-indent: 4 #
# End: #
