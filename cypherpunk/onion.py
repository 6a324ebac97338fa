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
This module seals a message into nested cypherpunk (Type I) remailer
layers.
"""

import re

from cypherpunk.interfaces import IPGPBackend
from cypherpunk.errors import EncryptionError, FormatError, PGPError

LAYER_PATTERN = re.compile(
    br'\A\n::\nAnon-To: (?P<address>[^\n]*)\n(?P<headers>.*?)\n\n::\nEncrypted: PGP\n\n',
    re.S)


def header_block(address, headers=()):
    """
    the cleartext block put in front of the ciphertext addressed to address
    """
    return ("\n::\nAnon-To: %s\n%s\n\n::\nEncrypted: PGP\n\n" % (address, "\n".join(headers))).encode('utf-8')


def encrypt_chain(chain, plaintext, headers, pgp):
    """
    Build the onion for one resolved chain.

    The last relay's layer is sealed first so the outermost layer is
    addressed to the first relay.

    :param chain: a non-empty list of relay addresses, first hop first.

    :param bytes plaintext: the innermost message.

    :param headers: extra header lines added to every layer.

    :param pgp: an IPGPBackend provider.

    :returns: the envelope bytes.
    """
    assert IPGPBackend.providedBy(pgp)
    assert len(chain) > 0
    headers = list(headers)
    envelope = bytes(plaintext)
    for position in range(len(chain) - 1, -1, -1):
        relay = chain[position]
        try:
            ciphertext = pgp.encrypt(envelope, [relay])
        except PGPError as e:
            raise EncryptionError(position, relay, str(e)) from e
        except Exception as e:
            raise EncryptionError(position, relay, "%s: %s" % (type(e).__name__, e)) from e
        envelope = header_block(relay, headers) + bytes(ciphertext)
    return envelope


def peel_layer(envelope):
    """
    split the outermost layer of an envelope
    -> (address, header lines, ciphertext)
    """
    match = LAYER_PATTERN.match(envelope)
    if match is None:
        raise FormatError("not a cypherpunk remailer layer")
    headers = match.group('headers').decode('utf-8')
    return (match.group('address').decode('utf-8'),
            headers.split("\n") if headers else [],
            envelope[match.end():])
