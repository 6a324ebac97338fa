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
This module turns a user's chain of relay tokens into concrete relay
address lists, one per redundancy attempt.
"""

import logging

import attr

from cypherpunk.errors import ChainResolutionError
from cypherpunk.relay import RelayRegistry

log = logging.getLogger(__name__)

# a chain token standing for a randomly chosen relay
WILDCARD = '*'


@attr.s(frozen=True)
class ChainResolution(object):
    """
    I am the returned result of calling `resolve`.  chains holds one
    list of relay addresses per attempt; dropped lists the literal
    tokens that named no known relay.
    """
    chains = attr.ib(validator=attr.validators.instance_of(list))
    dropped = attr.ib(validator=attr.validators.instance_of(list))


def _lookup_tables(aliases):
    if isinstance(aliases, RelayRegistry):
        return aliases.alias_map(), aliases.candidates()
    return dict(aliases), sorted(set(aliases.values()))


def resolve(tokens, aliases, redundancy, rng):
    """
    Resolve a chain of relay tokens once per redundancy attempt.

    :param tokens: a sequence of relay names, aliases or WILDCARD,
        resolved in the order given.

    :param aliases: a RelayRegistry or a mapping of name to address.

    :param int redundancy: number of independent attempts, at least 1.

    :param rng: randomness source with a choice() method, such as an
        instance of random.Random.

    :returns: a ChainResolution.
    """
    if redundancy < 1:
        raise ValueError("redundancy must be at least 1, not %r" % (redundancy,))
    address_map, candidates = _lookup_tables(aliases)

    chains = []
    dropped = []
    for attempt in range(redundancy):
        chain = []
        for token in tokens:
            if token == WILDCARD:
                if not candidates:
                    raise ChainResolutionError("no enabled remailer to stand in for %r" % WILDCARD)
                chain.append(rng.choice(candidates))
                continue
            address = address_map.get(token)
            if address is None:
                if token not in dropped:
                    log.warning("unknown remailer %r dropped from the chain", token)
                    dropped.append(token)
                continue
            chain.append(address)
        if not chain:
            raise ChainResolutionError(
                "chain %r resolves to no remailer on attempt %d" % (list(tokens), attempt + 1))
        chains.append(chain)
    return ChainResolution(chains=chains, dropped=dropped)
