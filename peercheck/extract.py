#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 15:02:44 krylon>
#
# /data/code/python/peercheck/extract.py
# created on 12. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.extract

(c) 2026 Benjamin Walkenhorst

Find peer URIs in a checkout of the public peers repository. The repository is
laid out as <root>/<region>/<country>.md.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Optional, Sequence, Union

from peercheck import common
from peercheck.common import PeerError
from peercheck.model import Peer, Protocol

peer_pat: Final[re.Pattern] = re.compile(r"(tcp|tls|quic)://([a-z0-9.\-:\[\]]+):([0-9]+)")

country_suffix: Final[str] = ".md"

skip_dirs: Final[frozenset[str]] = frozenset({"other"})


class ExtractionError(PeerError):
    """ExtractionError indicates the peer list could not be read."""


def extract_peers(text: str, region: str = "", country: str = "") -> list[Peer]:
    """Return all Peers whose URIs occur in <text>, in order of appearance."""
    peers: list[Peer] = []

    for m in peer_pat.finditer(text):
        port: int = int(m[3])
        if not 0 < port < 65536:
            continue
        peers.append(Peer(uri=m[0],
                          protocol=Protocol(m[1]),
                          host=m[2],
                          port=port,
                          region=region,
                          country=country))

    return peers


def _strip_suffix(name: str) -> str:
    if name.endswith(country_suffix):
        return name[:-len(country_suffix)]
    return name


@dataclass(kw_only=True, slots=True)
class Extractor:
    """Extractor walks the peer repository and collects Peers."""

    root: Path
    log: logging.Logger = field(default_factory=lambda: common.get_logger("extract"))

    def regions(self) -> list[str]:
        """Return the names of all regions, sorted."""
        try:
            with os.scandir(self.root) as entries:
                return sorted(e.name for e in entries
                              if e.is_dir()
                              and not e.name.startswith(".")
                              and e.name not in skip_dirs)
        except OSError as err:
            raise ExtractionError(f"Cannot read {self.root}: {err}") from err

    def countries(self, region: str) -> list[str]:
        """Return the names of all countries in <region>, sorted."""
        folder: Final[Path] = self.root / region
        try:
            with os.scandir(folder) as entries:
                return sorted(_strip_suffix(e.name) for e in entries
                              if e.is_file() and e.name.endswith(country_suffix))
        except OSError as err:
            raise ExtractionError(f"Cannot read {folder}: {err}") from err

    def read_country(self, region: str, country: str) -> list[Peer]:
        """Extract the Peers listed for <country> in <region>."""
        cfile: Final[Path] = self.root / region / f"{country}{country_suffix}"
        try:
            raw: bytes = cfile.read_bytes()
        except OSError as err:
            raise ExtractionError(f"Cannot read {cfile}: {err}") from err

        # Peer URIs are plain ASCII, stray bytes elsewhere in the file are no reason to fail.
        content: str = raw.decode("utf-8", errors="replace")

        peers = extract_peers(content, region, country)
        self.log.debug("Found %d peers in %s",
                       len(peers),
                       cfile)
        return peers

    def get_peers(self,
                  regions: Optional[Sequence[str]] = None,
                  countries: Optional[Sequence[str]] = None) -> list[Peer]:
        """Return the Peers of the selected regions and countries.

        An empty selection means everything.
        """
        if not self.root.is_dir():
            raise ExtractionError(f"{self.root} is not a directory")

        rsel: Final[frozenset[str]] = frozenset(regions or ())
        csel: Final[frozenset[str]] = frozenset(_strip_suffix(c) for c in countries or ())
        peers: list[Peer] = []

        for region in self.regions():
            if rsel and region not in rsel:
                continue
            for country in self.countries(region):
                if csel and country not in csel:
                    continue
                peers.extend(self.read_country(region, country))

        self.log.debug("Found %d peers in %s",
                       len(peers),
                       self.root)
        return peers


def get_peers(root: Union[str, Path],
              regions: Optional[Sequence[str]] = None,
              countries: Optional[Sequence[str]] = None) -> list[Peer]:
    """Collect the Peers listed in the repository at <root>."""
    ex = Extractor(root=Path(root))
    return ex.get_peers(regions, countries)


# Local Variables: #
# python-indent: 4 #
# End: #
