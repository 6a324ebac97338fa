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
from datetime import timedelta

import attr

from cypherpunk.directory import IdentityRecord, FreshnessRecord, StatsRecord
from cypherpunk.directory import parse_directory

log = logging.getLogger(__name__)


@attr.s
class Relay(object):
    """
    I am a remailer known to this run.  My email address is the PGP
    recipient id used to seal the layer addressed to me.
    """
    name = attr.ib()
    email = attr.ib(default='')
    options = attr.ib(converter=set, factory=set)
    latency = attr.ib(validator=attr.validators.instance_of(timedelta), default=timedelta(0))
    uptime = attr.ib(default=0.0)
    keys = attr.ib(factory=list)
    aliases = attr.ib(converter=set, factory=set)
    enabled = attr.ib(default=True)

    def __str__(self):
        return self.name

    def merge(self, **fields):
        """
        overwrite only the given fields, leaving every other one as it is
        """
        for field_name, value in fields.items():
            if value is None:
                continue
            setattr(self, field_name, value)
        attr.validate(self)
        return self

    def add_key(self, key):
        self.keys.append(key)


class RelayRegistry(object):
    """
    I accumulate partial directory records into one Relay per name.
    """

    def __init__(self):
        self.relays = {}
        self.last_update = None

    @classmethod
    def from_feed(cls, text):
        return cls().ingest(parse_directory(text))

    def __len__(self):
        return len(self.relays)

    def __contains__(self, name):
        return name in self.relays

    def __getitem__(self, name):
        return self.relays[name]

    def __iter__(self):
        return iter(self.relays)

    def get(self, name, default=None):
        return self.relays.get(name, default)

    def values(self):
        return self.relays.values()

    def _upsert(self, name, **fields):
        relay = self.relays.get(name)
        if relay is None:
            relay = Relay(name=name, **dict((k, v) for k, v in fields.items() if v is not None))
            self.relays[name] = relay
            return relay
        return relay.merge(**fields)

    def apply(self, record):
        """
        Fold one partial record into the registry.

        An identity record on a known relay only replaces its options, a
        stats record on a known relay only replaces latency and uptime.

        :returns: the affected Relay, or None for a freshness record.
        """
        if isinstance(record, IdentityRecord):
            if record.name in self.relays:
                return self.relays[record.name].merge(options=set(record.options))
            return self._upsert(record.name, email=record.email, options=set(record.options))
        if isinstance(record, StatsRecord):
            if record.name in self.relays:
                return self.relays[record.name].merge(latency=record.latency, uptime=record.uptime)
            return self._upsert(record.name, email=record.email,
                                latency=record.latency, uptime=record.uptime)
        if isinstance(record, FreshnessRecord):
            log.info("relay directory last updated %s", record.date)
            self.last_update = record.date
            return None
        raise TypeError("not a directory record: %r" % (record,))

    def ingest(self, records):
        for record in records:
            self.apply(record)
        log.info("relay registry holds %d relays", len(self.relays))
        return self

    def add_config(self, relay_config):
        """
        register a relay from the persisted configuration, creating it
        if the directory never mentioned it
        """
        return self._upsert(
            relay_config.canonical_name,
            email=relay_config.email,
            aliases=set(relay_config.name[1:]),
            enabled=relay_config.enable,
        )

    def alias_map(self):
        """
        -> {name or alias: email} covering every enabled relay
        """
        aliases = {}
        for relay in self.relays.values():
            if not relay.enabled:
                continue
            aliases[relay.name] = relay.email
            for alias in relay.aliases:
                aliases.setdefault(alias, relay.email)
        return aliases

    def candidates(self):
        """
        -> sorted addresses of the enabled relays, the pool for wildcards
        """
        return sorted(set(relay.email for relay in self.relays.values() if relay.enabled))
