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

import logging
import random

import attr

from cypherpunk.chain import resolve
from cypherpunk.errors import ConfigError, EncryptionError, KeyImportError, PGPError
from cypherpunk.interfaces import IPGPBackend
from cypherpunk.onion import encrypt_chain
from cypherpunk.relay import RelayRegistry

log = logging.getLogger(__name__)


@attr.s(frozen=True)
class ComposeResult(object):
    """
    I am the returned result of calling `CypherpunkClient.compose`:
    one envelope per successful attempt, one EncryptionError per
    failed one, and the chain tokens that named no relay.
    """
    envelopes = attr.ib(validator=attr.validators.instance_of(list))
    failures = attr.ib(validator=attr.validators.instance_of(list))
    dropped = attr.ib(validator=attr.validators.instance_of(list))


class CypherpunkClient(object):
    """
    I compose anonymous messages for a chain of cypherpunk remailers.

    :param pgp: an IPGPBackend provider.

    :param RelayRegistry registry: the known relays.

    :param rng: randomness source used for wildcard tokens; a fresh
        random.SystemRandom when omitted.
    """

    def __init__(self, pgp, registry=None, rng=None):
        assert IPGPBackend.providedBy(pgp)
        self.pgp = pgp
        self.registry = registry if registry is not None else RelayRegistry()
        self.rng = rng if rng is not None else random.SystemRandom()

    def _import_key(self, relay, config):
        try:
            key = config.decode_key()
            self.pgp.import_key(key)
        except (ConfigError, PGPError) as e:
            raise KeyImportError(relay.name, str(e)) from e
        relay.add_key(key)

    def import_keys(self, configs):
        """
        Import the keys of every enabled relay configuration.  A key that
        cannot be decoded or imported is logged and skipped.

        :returns: a list of KeyImportError, one per failed key.
        """
        failures = []
        for config in configs:
            relay = self.registry.add_config(config)
            if not config.enable:
                log.debug("remailer %s is disabled, not importing its key", relay)
                continue
            try:
                self._import_key(relay, config)
            except KeyImportError as e:
                log.warning("cannot import key: %s", e)
                failures.append(e)
        return failures

    def resolve(self, chain, redundancy=1):
        """
        resolve a chain given first hop first; the tokens are drawn last
        hop first and each result is returned first hop first
        """
        resolution = resolve(list(reversed(chain)), self.registry, redundancy, self.rng)
        return attr.evolve(resolution, chains=[list(reversed(c)) for c in resolution.chains])

    def compose(self, message, chain, headers=(), redundancy=1):
        """
        Build one envelope per redundancy attempt.

        :param bytes message: the innermost plaintext, normally carrying
            its own headers for the final remailer.

        :param chain: relay names, aliases or wildcards, first hop first.

        :param headers: extra header lines for every layer.

        :param int redundancy: number of independent envelopes.

        :returns: a ComposeResult.
        """
        resolution = self.resolve(chain, redundancy)
        envelopes = []
        failures = []
        for attempt, resolved in enumerate(resolution.chains):
            try:
                envelopes.append(encrypt_chain(resolved, message, headers, self.pgp))
            except EncryptionError as e:
                log.error("attempt %d of %d failed", attempt + 1, redundancy, exc_info=e)
                failures.append(e)
        return ComposeResult(envelopes=envelopes, failures=failures, dropped=resolution.dropped)
