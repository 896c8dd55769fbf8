#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 13:58:02 krylon>
#
# /data/code/python/peercheck/__init__.py
# created on 12. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the PeerCheck peer prober. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
peercheck.__init__

(c) 2026 Benjamin Walkenhorst

PeerCheck reads the public peer list of an overlay network, checks which of
the peers are reachable and how fast they answer.
"""

# Local Variables: #
# python-indent: 4 #
# End: #
