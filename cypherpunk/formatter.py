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
#

import attr

from cypherpunk.errors import EncodingError, FormatError

ANON_TO_MARKER = "Anon-To: "


@attr.s(frozen=True)
class OutputFormat(object):
    name = attr.ib()
    extension = attr.ib()


CYPHERPUNK = OutputFormat('cypherpunk', 'txt')
MAILTO = OutputFormat('mailto', 'txt')
EML = OutputFormat('eml', 'eml')

OUTPUT_FORMATS = (CYPHERPUNK, MAILTO, EML)


def split_envelope(envelope):
    """
    find the first hop's address and the message body to mail to it
    -> (address, body)
    """
    start = envelope.find(ANON_TO_MARKER)
    if start == -1:
        raise FormatError("envelope has no %r line" % ANON_TO_MARKER)
    start += len(ANON_TO_MARKER)
    end = envelope.find("\n", start)
    if end == -1:
        raise FormatError("envelope ends inside the %r line" % ANON_TO_MARKER)
    separator = envelope.find("\n\n", end + 1)
    if separator == -1:
        raise FormatError("envelope has no blank line before its body")
    return envelope[start:end], envelope[separator + 2:]


def percent_encode(text):
    """
    percent encode every utf-8 byte that is not an ascii letter or digit
    """
    encoded = []
    for byte in text.encode('utf-8'):
        char = chr(byte)
        if byte < 0x80 and char.isalnum():
            encoded.append(char)
        else:
            encoded.append("%%%02X" % byte)
    return "".join(encoded)


def format_envelope(envelope, mode):
    """
    Render an envelope, given as text, in one of the OUTPUT_FORMATS.
    """
    address, body = split_envelope(envelope)
    if mode == CYPHERPUNK:
        return envelope
    if mode == MAILTO:
        return "mailto:%s?body=%s" % (address, percent_encode(body))
    if mode == EML:
        return "\n".join([
            "MIME-Version: 1.0",
            "Content-Type: text/plain; charset=utf-8",
            "To: %s" % address,
            "",
            body,
        ])
    raise FormatError("unknown output format %r" % (mode,))


def render(envelope, mode):
    """
    decode envelope bytes and format them
    """
    try:
        text = bytes(envelope).decode('utf-8')
    except UnicodeDecodeError as e:
        raise EncodingError("envelope is not valid utf-8 text") from e
    return format_envelope(text, mode)
