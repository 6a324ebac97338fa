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

import zope.interface


class IPGPBackend(zope.interface.Interface):
    """
    I am the PGP capability used to seal each layer of a message.
    Failures are reported by raising PGPError.
    """

    def import_key(self, key):
        """
        import a single public key, given as bytes, into my keyring
        """

    def encrypt(self, payload, recipients):
        """
        encrypt payload bytes to every address in recipients
        -> ciphertext bytes
        """
