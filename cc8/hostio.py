#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host filesystem for later writing into
RAM.  There are no save states, as programs are not really complex enough to
warrant them.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

    def load_rom(self, filename):
        # ROMs are raw images, normally ending in .ch8 or .c8, with no header to check
        return self.load_binary(filename)
