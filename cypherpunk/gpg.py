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
An IPGPBackend provider built on python-gnupg, working against a private
keyring.
"""

import logging
import tempfile
from concurrent import futures

import gnupg
import zope.interface

from cypherpunk.interfaces import IPGPBackend
from cypherpunk.errors import PGPError

log = logging.getLogger(__name__)

DEFAULT_GPG_TIMEOUT = 60


@zope.interface.implementer(IPGPBackend)
class GPGBackend(object):
    """
    I drive gpg through python-gnupg.  Unless told otherwise I keep my
    keys in a temporary home directory so the user's own keyring is
    never touched.

    :param gpg_binary: the gpg executable to run.

    :param homedir: keyring directory; a temporary one when omitted.

    :param timeout: seconds any single import or encryption may take.
        gpg calls run on a worker thread and the caller stops waiting
        once the timeout expires.
    """

    def __init__(self, gpg_binary='gpg', homedir=None, timeout=DEFAULT_GPG_TIMEOUT):
        self.gpg_binary = gpg_binary
        self.timeout = timeout
        self._tempdir = None
        if homedir is None:
            self._tempdir = tempfile.TemporaryDirectory(prefix='cypherpunk-gpg-')
            homedir = self._tempdir.name
        self.homedir = homedir
        try:
            self.gpg = gnupg.GPG(gpgbinary=gpg_binary, gnupghome=homedir)
        except (OSError, ValueError) as e:
            self.close()
            raise PGPError("cannot execute %s" % gpg_binary) from e
        self._executor = futures.ThreadPoolExecutor(max_workers=1)

    def close(self):
        executor = getattr(self, '_executor', None)
        if executor is not None:
            executor.shutdown(wait=False)
            self._executor = None
        if self._tempdir is not None:
            self._tempdir.cleanup()
            self._tempdir = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _call(self, name, function, *args, **kwargs):
        log.debug("running gpg %s in %s", name, self.homedir)
        future = self._executor.submit(function, *args, **kwargs)
        try:
            return future.result(timeout=self.timeout)
        except futures.TimeoutError as e:
            raise PGPError("gpg %s did not finish within %s seconds" % (name, self.timeout)) from e
        except OSError as e:
            raise PGPError("cannot execute %s" % self.gpg_binary) from e

    def import_key(self, key):
        result = self._call('import', self.gpg.import_keys, bytes(key))
        if not result.fingerprints:
            raise PGPError("gpg imported no key: %s" % (result.stderr or '').strip())
        log.debug("imported %s", ", ".join(result.fingerprints))

    def encrypt(self, payload, recipients):
        result = self._call('encrypt', self.gpg.encrypt, bytes(payload), list(recipients),
                            always_trust=True, armor=True)
        if not result.ok:
            raise PGPError("gpg %s: %s" % (result.status, (result.stderr or '').strip()))
        return result.data
