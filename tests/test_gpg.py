import os
import threading

import pytest

from cypherpunk import GPGBackend, IPGPBackend, PGPError
import cypherpunk.gpg

CIPHERTEXT = b"-----BEGIN PGP MESSAGE-----\n...\n-----END PGP MESSAGE-----\n"


class FakeResult(object):

    def __init__(self, **fields):
        self.ok = True
        self.status = "encryption ok"
        self.stderr = ""
        self.data = b""
        self.fingerprints = []
        self.__dict__.update(fields)


class FakeGPG(object):
    """
    I record what a gnupg.GPG would have been asked to do
    """

    instances = []

    def __init__(self, gpgbinary="gpg", gnupghome=None):
        self.gpgbinary = gpgbinary
        self.gnupghome = gnupghome
        self.calls = []
        self.import_result = FakeResult(fingerprints=["A" * 40])
        self.encrypt_result = FakeResult(data=CIPHERTEXT)
        self.release = None
        FakeGPG.instances.append(self)

    def import_keys(self, key_data):
        self.calls.append(("import_keys", key_data))
        return self.import_result

    def encrypt(self, data, recipients, always_trust=False, armor=True):
        self.calls.append(("encrypt", data, recipients, always_trust, armor))
        if self.release is not None:
            self.release.wait(5)
        return self.encrypt_result


@pytest.fixture
def fake_gpg(monkeypatch):
    FakeGPG.instances = []
    monkeypatch.setattr(cypherpunk.gpg.gnupg, "GPG", FakeGPG)
    return FakeGPG


def test_provides_interface(fake_gpg):
    with GPGBackend() as gpg:
        assert IPGPBackend.providedBy(gpg)


def test_private_homedir_is_removed_on_close(fake_gpg):
    gpg = GPGBackend()
    homedir = gpg.homedir
    assert os.path.isdir(homedir)
    assert fake_gpg.instances[0].gnupghome == homedir
    gpg.close()
    assert not os.path.exists(homedir)


def test_encrypt(fake_gpg, tmpdir):
    with GPGBackend(gpg_binary="gpg2", homedir=str(tmpdir), timeout=5) as gpg:
        ciphertext = gpg.encrypt(b"payload", ["remailer@dizum.com"])
    binding = fake_gpg.instances[0]
    assert ciphertext == CIPHERTEXT
    assert binding.gpgbinary == "gpg2"
    assert binding.gnupghome == str(tmpdir)
    assert binding.calls == [("encrypt", b"payload", ["remailer@dizum.com"], True, True)]


def test_import_key(fake_gpg, tmpdir):
    with GPGBackend(homedir=str(tmpdir)) as gpg:
        gpg.import_key(b"key material")
    assert fake_gpg.instances[0].calls == [("import_keys", b"key material")]


def test_import_without_fingerprints(fake_gpg, tmpdir):
    with GPGBackend(homedir=str(tmpdir)) as gpg:
        fake_gpg.instances[0].import_result = FakeResult(stderr="gpg: no valid OpenPGP data found.\n")
        with pytest.raises(PGPError) as excinfo:
            gpg.import_key(b"garbage")
    assert "no valid OpenPGP data found" in str(excinfo.value)


def test_failed_encryption(fake_gpg, tmpdir):
    with GPGBackend(homedir=str(tmpdir)) as gpg:
        fake_gpg.instances[0].encrypt_result = FakeResult(
            ok=False, status="invalid recipient",
            stderr="gpg: remailer@dizum.com: skipped: No public key\n")
        with pytest.raises(PGPError) as excinfo:
            gpg.encrypt(b"payload", ["remailer@dizum.com"])
    assert "No public key" in str(excinfo.value)


def test_timeout(fake_gpg, tmpdir):
    gpg = GPGBackend(homedir=str(tmpdir), timeout=0.05)
    binding = fake_gpg.instances[0]
    binding.release = threading.Event()
    try:
        with pytest.raises(PGPError) as excinfo:
            gpg.encrypt(b"payload", ["remailer@dizum.com"])
        assert "did not finish" in str(excinfo.value)
    finally:
        binding.release.set()
        gpg.close()


def test_missing_binary(tmpdir):
    with pytest.raises(PGPError) as excinfo:
        GPGBackend(gpg_binary=str(tmpdir.join("no-such-gpg")), homedir=str(tmpdir))
    assert isinstance(excinfo.value.__cause__, (OSError, ValueError))
