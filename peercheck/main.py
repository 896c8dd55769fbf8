#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 17:52:40 krylon>
#
# /data/code/python/peercheck/main.py
# created on 15. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.main

(c) 2026 Benjamin Walkenhorst
"""


import argparse
import logging
import pathlib
import sys
from typing import Optional, Sequence

from peercheck import common
from peercheck.checker import Checker
from peercheck.extract import ExtractionError, get_peers
from peercheck.model import Peer
from peercheck.report import render_json, render_text


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Find the peers listed below a directory, probe them, report the results."""
    argp: argparse.ArgumentParser = argparse.ArgumentParser(prog=common.AppName.lower())
    argp.add_argument("-j", "--json",
                      action="store_true",
                      help="Output results in JSON format")
    argp.add_argument("-t", "--timeout",
                      type=float,
                      default=common.conn_timeout,
                      help="Seconds to wait for a connection to a peer")
    argp.add_argument("-w", "--workers",
                      type=int,
                      default=0,
                      help="The maximum number of peers to probe in parallel (0 = no limit)")
    argp.add_argument("-r", "--region",
                      action="append",
                      default=[],
                      help="Only check peers from this region (may be given multiple times)")
    argp.add_argument("-c", "--country",
                      action="append",
                      default=[],
                      help="Only check peers from this country (may be given multiple times)")
    argp.add_argument("-b", "--basedir",
                      type=pathlib.Path,
                      default=common.path.base(),
                      help="Directory to store application data in")
    argp.add_argument("-v", "--verbose",
                      action="store_true",
                      help="Print debug messages")
    argp.add_argument("-V", "--version",
                      action="version",
                      version=f"{common.AppName} {common.AppVersion}")
    argp.add_argument("path",
                      nargs="*",
                      help="Path to the public peers repository on a disk")

    args = argp.parse_args(argv)

    if len(args.path) != 1:
        print(f"Usage: {argp.prog} [-j] [path to public_peers repository on a disk]")
        print(f"I.e.:  {argp.prog} ~/Projects/yggdrasil/public_peers")
        return 0

    common.set_basedir(args.basedir)
    if args.verbose:
        common.set_tty_level(logging.DEBUG)

    data_dir: str = args.path[0]

    try:
        peers: list[Peer] = get_peers(data_dir, args.region, args.country)
    except ExtractionError as err:
        log = common.get_logger("main", terminal=False)
        log.error("Failed to read peers from %s: %s", data_dir, err)
        print(f"Can't find peers in a directory: {data_dir}")
        return 1

    chk = Checker(timeout=args.timeout, wcnt=args.workers)
    chk.probe_all(peers)

    if args.json:
        print(render_json(peers))
    else:
        print(render_text(peers))

    return 0


if __name__ == '__main__':
    sys.exit(main())

# Local Variables: #
# python-indent: 4 #
# End: #
