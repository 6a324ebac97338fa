import base64

import pytest
import zope.interface
from nacl.public import PrivateKey, SealedBox

from cypherpunk import IPGPBackend, PGPError, RelayRegistry

ARMOR_BEGIN = b"-----BEGIN PGP MESSAGE-----\n"
ARMOR_END = b"-----END PGP MESSAGE-----\n"

FEED = """\
Stats-Version: 2.0
Generated: Sat 05 Oct 2019 12:00:01 GMT
Last update: Sat 05 Oct 2019 12:00:01 GMT
mixmaster           history  latency  uptime
--------------------------------------------
dizum    remailer@dizum.com    ************  1:23:45  99.98%
paranoia mixmaster@remailer.paranoici.org  ++++++++++++    12:10 100.00%
bogus    bogus@example.org   ----------    99  97.5%

$remailer{"dizum"} = "<remailer@dizum.com> cpunk max mix pgp pgponly repgp remix latent hash cut test ekx inflt50 rhop5 reord klen1000";
$remailer{"paranoia"} = "<mixmaster@remailer.paranoici.org> cpunk max mix pgp ek esub post klen64";
$remailer{"frell"} = "<godot@frell.eu.org> cpunk max mix pgp";
"""


@zope.interface.implementer(IPGPBackend)
class SealedBoxPGP(object):
    """
    I stand in for gpg: every relay address gets a curve25519 keypair
    and each layer is a libsodium sealed box wrapped in PGP-style armor.
    """

    def __init__(self):
        self.private_keys = {}
        self.imported = []
        self.fail_for = set()
        self.broken_for = {}
        self.calls = []

    def add_relay(self, address):
        self.private_keys[address] = PrivateKey.generate()

    def import_key(self, key):
        if key.startswith(b"reject"):
            raise PGPError("gpg exited with code 2: no valid OpenPGP data found")
        self.imported.append(key)

    def encrypt(self, payload, recipients):
        assert len(recipients) == 1
        recipient = recipients[0]
        self.calls.append(recipient)
        if recipient in self.broken_for:
            raise self.broken_for[recipient]
        if recipient in self.fail_for or recipient not in self.private_keys:
            raise PGPError("%s: skipped: No public key" % recipient)
        sealed = SealedBox(self.private_keys[recipient].public_key).encrypt(payload)
        return ARMOR_BEGIN + base64.encodebytes(sealed) + ARMOR_END

    def decrypt(self, address, ciphertext):
        assert ciphertext.startswith(ARMOR_BEGIN) and ciphertext.endswith(ARMOR_END)
        sealed = base64.decodebytes(ciphertext[len(ARMOR_BEGIN):-len(ARMOR_END)])
        return SealedBox(self.private_keys[address]).decrypt(sealed)


class SequenceRandom(object):
    """
    a randomness source returning picks in a fixed order
    """

    def __init__(self, picks):
        self.picks = list(picks)

    def choice(self, seq):
        pick = self.picks.pop(0)
        assert pick in seq
        return pick


@pytest.fixture
def feed():
    return FEED


@pytest.fixture
def registry():
    return RelayRegistry.from_feed(FEED)


@pytest.fixture
def pgp(registry):
    backend = SealedBoxPGP()
    for relay in registry.values():
        backend.add_relay(relay.email)
    return backend


@pytest.fixture
def sealed_box_pgp():
    return SealedBoxPGP


@pytest.fixture
def sequence_random():
    return SequenceRandom
