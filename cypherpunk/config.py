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
Persisted relay configuration.  A configuration file is TOML with one
[[remailer]] table per relay:

    [[remailer]]
    name = ["dizum", "diz"]
    email = "remailer@dizum.com"
    enable = true
    key = "base64:mQENBF..."
"""

import base64
import binascii
import logging

import attr
import toml

from cypherpunk.errors import ConfigError

log = logging.getLogger(__name__)

# the stored key string starts with a label that is not key material
KEY_PREFIX_LENGTH = 7


def _is_name_list(instance, attribute, value):
    if not isinstance(value, list) or len(value) == 0:
        raise ConfigError("remailer name must be a non-empty list of aliases")
    for name in value:
        if not isinstance(name, str) or not name:
            raise ConfigError("remailer aliases must be non-empty strings")


def _is_type(kind):
    def validator(instance, attribute, value):
        if not isinstance(value, kind):
            raise ConfigError("remailer %s must be %s, not %r" % (attribute.name, kind.__name__, value))
    return validator


@attr.s(frozen=True)
class RelayConfig(object):
    name = attr.ib(validator=_is_name_list)
    email = attr.ib(validator=_is_type(str))
    enable = attr.ib(validator=_is_type(bool), default=True)
    key = attr.ib(validator=_is_type(str), default='')

    @property
    def canonical_name(self):
        return self.name[0]

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ConfigError("remailer entry must be a table, not %r" % (data,))
        missing = [field for field in ('name', 'email') if field not in data]
        if missing:
            raise ConfigError("remailer entry lacks %s" % ", ".join(missing))
        name = data['name']
        if isinstance(name, str):
            name = [name]
        return cls(
            name=name,
            email=data['email'],
            enable=data.get('enable', True),
            key=data.get('key', ''),
        )

    def decode_key(self):
        """
        strip the label prefix and base64 decode the key material
        """
        material = self.key[KEY_PREFIX_LENGTH:]
        if not material.strip():
            raise ConfigError("remailer %s has no key" % self.canonical_name)
        try:
            return base64.b64decode(''.join(material.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ConfigError("remailer %s has a malformed key" % self.canonical_name) from e


def parse_relay_config(text):
    """
    parse TOML text into a list of RelayConfig
    """
    try:
        data = toml.loads(text)
    except toml.TomlDecodeError as e:
        raise ConfigError("malformed relay configuration") from e
    entries = data.get('remailer', [])
    if not isinstance(entries, list):
        raise ConfigError("'remailer' must be an array of tables")
    return [RelayConfig.from_dict(entry) for entry in entries]


def load_relay_config(path):
    """
    Read the relay configuration file.

    :param path: filesystem path of the TOML file.

    :returns: a list of RelayConfig.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError("cannot read relay configuration %s" % path) from e
    configs = parse_relay_config(text)
    log.debug("loaded %d relays from %s", len(configs), path)
    return configs
