#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 17:20:03 krylon>
#
# /data/code/python/peercheck/report.py
# created on 14. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.report

(c) 2026 Benjamin Walkenhorst
"""

import json
from datetime import datetime
from typing import Any, Optional, Sequence

from tabulate import tabulate

from peercheck import common
from peercheck.model import Peer


def alive(peers: Sequence[Peer]) -> list[Peer]:
    """Return the reachable Peers, fastest first.

    Peers with the same latency stay in the order they were given in.
    """
    return sorted((p for p in peers if p.up), key=lambda p: p.latency)


def dead(peers: Sequence[Peer]) -> list[Peer]:
    """Return the Peers that could not be reached."""
    return [p for p in peers if not p.up]


def render_text(peers: Sequence[Peer], now: Optional[datetime] = None) -> str:
    """Render the results as a pair of tables."""
    if now is None:
        now = datetime.now().astimezone()

    dead_rows = [(p.uri, p.location) for p in dead(peers)]
    alive_rows = [(p.uri, f"{p.latency_ms:.3f}", p.location) for p in alive(peers)]

    lines: list[str] = [
        f"Report date: {now.strftime(common.TimeFmt)}",
        "Dead peers:",
        tabulate(dead_rows, headers=["URI", "Location"], tablefmt="plain"),
        "",
        "",
        "Alive peers (sorted by latency):",
        tabulate(alive_rows,
                 headers=["URI", "Latency (ms)", "Location"],
                 tablefmt="plain",
                 disable_numparse=True),
    ]

    return "\n".join(lines)


def _entry(p: Peer) -> dict[str, Any]:
    return {
        "uri": p.uri,
        "region": p.region,
        "country": p.country,
        "up": p.up,
        "latency": p.latency_ms,
    }


def render_json(peers: Sequence[Peer]) -> str:
    """Render the results as JSON.

    "alive" holds the reachable Peers sorted by latency, "source" holds all
    Peers in their original order. Latency is given in milliseconds.
    """
    data: dict[str, list[dict[str, Any]]] = {
        "alive": [_entry(p) for p in alive(peers)],
        "source": [_entry(p) for p in peers],
    }
    return json.dumps(data, indent=2)


# Local Variables: #
# python-indent: 4 #
# End: #
