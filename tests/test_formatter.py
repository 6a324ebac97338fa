import pytest

from cypherpunk import format_envelope, render, header_block
from cypherpunk import CYPHERPUNK, MAILTO, EML, OUTPUT_FORMATS, OutputFormat
from cypherpunk import FormatError, EncodingError

ENVELOPE = "\n::\nAnon-To: a@b.com\n\n::\nEncrypted: PGP\n\nHello World"


def test_cypherpunk_is_identity():
    assert format_envelope(ENVELOPE, CYPHERPUNK) == ENVELOPE


def test_mailto():
    assert format_envelope(ENVELOPE, MAILTO) == "mailto:a@b.com?body=Hello%20World"


def test_eml():
    assert format_envelope(ENVELOPE, EML).split("\n") == [
        "MIME-Version: 1.0",
        "Content-Type: text/plain; charset=utf-8",
        "To: a@b.com",
        "",
        "Hello World",
    ]


def test_mailto_of_a_built_envelope():
    armor = "-----BEGIN PGP MESSAGE-----\nhQEMA+x/y=\n-----END PGP MESSAGE-----\n"
    envelope = header_block("remailer@dizum.com").decode("utf-8") + armor
    assert format_envelope(envelope, MAILTO) == (
        "mailto:remailer@dizum.com?body="
        "%3A%3A%0AEncrypted%3A%20PGP%0A%0A"
        "%2D%2D%2D%2D%2DBEGIN%20PGP%20MESSAGE%2D%2D%2D%2D%2D%0AhQEMA%2Bx%2Fy%3D%0A"
        "%2D%2D%2D%2D%2DEND%20PGP%20MESSAGE%2D%2D%2D%2D%2D%0A")
    assert format_envelope(envelope, EML).endswith("\n\n::\nEncrypted: PGP\n\n" + armor)


def test_mailto_encodes_utf8_bytes():
    envelope = "\n::\nAnon-To: a@b.com\n\n::\nEncrypted: PGP\n\ncafé_~."
    assert format_envelope(envelope, MAILTO) == "mailto:a@b.com?body=caf%C3%A9%5F%7E%2E"


def test_missing_marker():
    for mode in OUTPUT_FORMATS:
        with pytest.raises(FormatError):
            format_envelope("\n::\nTo: a@b.com\n\n::\nEncrypted: PGP\n\nHello", mode)


def test_missing_blank_line():
    for mode in OUTPUT_FORMATS:
        with pytest.raises(FormatError):
            format_envelope("\n::\nAnon-To: a@b.com\nHello", mode)
        with pytest.raises(FormatError):
            format_envelope("\n::\nAnon-To: a@b.com", mode)


def test_unknown_mode():
    with pytest.raises(FormatError):
        format_envelope(ENVELOPE, OutputFormat("pdf", "pdf"))


def test_extension_hints():
    assert CYPHERPUNK.extension == "txt"
    assert MAILTO.extension == "txt"
    assert EML.extension == "eml"


def test_render():
    assert render(ENVELOPE.encode("utf-8"), MAILTO) == "mailto:a@b.com?body=Hello%20World"
    with pytest.raises(EncodingError):
        render(b"\n::\nAnon-To: a@b.com\n\n::\nEncrypted: PGP\n\n\xff\xfe", CYPHERPUNK)
