#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 19:02:26 krylon>
#
# /data/code/python/peercheck/test_checker.py
# created on 14. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.test_checker

(c) 2026 Benjamin Walkenhorst
"""

import os
import shutil
import socket
import time
import unittest
from datetime import datetime, timedelta
from threading import Lock, current_thread
from typing import Final

from peercheck import common
from peercheck.checker import Checker, probe_all
from peercheck.model import Peer, ProbeResult, Protocol

test_dir: Final[str] = os.path.join(
    "/tmp",
    datetime.now().strftime(f"{common.AppName.lower()}_test_checker_%Y%m%d_%H%M%S"))

peer_cnt: Final[int] = 40
nap: Final[float] = 0.25


class SlowProber:
    """SlowProber pretends to probe a Peer by sleeping for a while.

    Peers on even ports are up, with a latency of <port> milliseconds.
    """

    def __init__(self, delay: float = nap) -> None:
        self.delay = delay
        self.lock = Lock()
        self.running = 0
        self.max_running = 0
        self.threads: set[str] = set()

    def probe(self, peer: Peer) -> ProbeResult:
        with self.lock:
            self.running += 1
            self.max_running = max(self.max_running, self.running)
            self.threads.add(current_thread().name)
        try:
            time.sleep(self.delay)
            if peer.port % 2 == 0:
                res = ProbeResult.up(timedelta(milliseconds=peer.port))
            else:
                res = ProbeResult.down()
            peer.record(res)
            return res
        finally:
            with self.lock:
                self.running -= 1


class BrokenProber:
    """BrokenProber fails in ways a Prober never should."""

    def probe(self, peer: Peer) -> ProbeResult:
        raise RuntimeError(f"Cannot probe {peer.uri}")


def make_peers(cnt: int) -> list[Peer]:
    """Create <cnt> Peers on ports 1 to <cnt>."""
    return [Peer(uri=f"tcp://192.0.2.1:{i}",
                 protocol=Protocol.TCP,
                 host="192.0.2.1",
                 port=i) for i in range(1, cnt + 1)]


class TestChecker(unittest.TestCase):
    """Test probing many Peers in parallel."""

    @classmethod
    def setUpClass(cls) -> None:
        """Prepare the testing environment."""
        common.set_basedir(test_dir)

    @classmethod
    def tearDownClass(cls) -> None:
        """Clean up afterwards."""
        shutil.rmtree(test_dir, ignore_errors=True)

    def test_01_probe_all(self) -> None:
        """Every Peer is probed exactly once, all of them in parallel."""
        peers: list[Peer] = make_peers(peer_cnt)
        prober: SlowProber = SlowProber()
        chk: Checker = Checker(prober=prober)  # type: ignore

        start: Final[float] = time.monotonic()
        chk.probe_all(peers)
        elapsed: Final[float] = time.monotonic() - start

        for p in peers:
            self.assertTrue(p.probed)
            self.assertEqual(p.up, p.port % 2 == 0)
        self.assertEqual(len(prober.threads), peer_cnt)
        self.assertEqual(prober.running, 0)
        self.assertLess(elapsed, nap * peer_cnt / 4)

    def test_02_worker_limit(self) -> None:
        """No more than wcnt probes are in flight at the same time."""
        peers: list[Peer] = make_peers(12)
        prober: SlowProber = SlowProber(0.05)
        chk: Checker = Checker(prober=prober, wcnt=3)  # type: ignore

        chk.probe_all(peers)

        self.assertTrue(all(p.probed for p in peers))
        self.assertLessEqual(prober.max_running, 3)

    def test_03_broken_probe(self) -> None:
        """A probe that blows up leaves its Peer marked as down."""
        peers: list[Peer] = make_peers(5)
        chk: Checker = Checker(prober=BrokenProber())  # type: ignore

        chk.probe_all(peers)

        for p in peers:
            self.assertTrue(p.probed)
            self.assertFalse(p.up)

    def test_04_empty(self) -> None:
        """Probing no Peers at all is fine."""
        chk: Checker = Checker(prober=SlowProber())  # type: ignore
        chk.probe_all([])

    def test_05_loopback(self) -> None:
        """Probe real sockets on the loopback interface."""
        with socket.create_server(("127.0.0.1", 0), backlog=8) as srv:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(("127.0.0.1", 0))
                closed: int = s.getsockname()[1]
            port: int = srv.getsockname()[1]
            peers: list[Peer] = [
                Peer(uri=f"tcp://127.0.0.1:{closed}",
                     protocol=Protocol.TCP,
                     host="127.0.0.1",
                     port=closed),
                Peer(uri=f"tcp://127.0.0.1:{port}",
                     protocol=Protocol.TCP,
                     host="127.0.0.1",
                     port=port),
                Peer(uri=f"tls://127.0.0.1:{port}",
                     protocol=Protocol.TLS,
                     host="127.0.0.1",
                     port=port),
            ]

            probe_all(peers, 2.0)

        self.assertEqual([p.up for p in peers], [False, True, True])


# Local Variables: #
# python-indent: 4 #
# End: #
