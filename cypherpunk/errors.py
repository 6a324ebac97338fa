# Copyright 2019 The cypherpunk developers
#
# This file is part of cypherpunk.
#
# cypherpunk is free software: you can redistribute it and/or modify
# it under the terms of version 3 of the GNU Lesser General Public
# License as published by the Free Software Foundation.
#
# cypherpunk is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with cypherpunk.  If not, see
# <http://www.gnu.org/licenses/>.

"""
error classes for relay directory ingestion and chain encryption
"""


class CypherpunkError(Exception):
    pass


# directory errors

class FeedFetchError(CypherpunkError):
    pass


class FeedParseError(CypherpunkError):
    pass


# key and backend errors

class PGPError(CypherpunkError):
    pass


class KeyImportError(CypherpunkError):
    """
    raised, or collected, when a single relay key cannot be imported
    """

    def __init__(self, relay, message):
        super(KeyImportError, self).__init__("%s: %s" % (relay, message))
        self.relay = relay


# client errors

class ChainResolutionError(CypherpunkError):
    pass


class EncryptionError(CypherpunkError):
    """
    a single layer of the onion failed to encrypt; position is the
    index of the relay in the forward chain
    """

    def __init__(self, position, relay, message="encryption failed"):
        super(EncryptionError, self).__init__(
            "hop %d (%s): %s" % (position, relay, message))
        self.position = position
        self.relay = relay


class EncodingError(CypherpunkError):
    pass


class ConfigError(CypherpunkError):
    pass


class FormatError(CypherpunkError):
    pass
