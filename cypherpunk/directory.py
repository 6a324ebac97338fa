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
This module parses the cypherpunk remailer directory feed (rlist.txt)
into partial relay records.  The feed is untrusted: lines that match
nothing are ignored and malformed statistics fall back to defaults.
"""

import logging
import re
from datetime import timedelta
from urllib.parse import urljoin

import attr
import requests

from cypherpunk.errors import FeedFetchError, FeedParseError

log = logging.getLogger(__name__)

DEFAULT_DIRECTORY_SOURCE = 'https://remailer.paranoici.org/'
DEFAULT_FETCH_TIMEOUT = 30
DIRECTORY_FILENAME = 'rlist.txt'

DIRECTORY_PATTERN = re.compile(
    r'^(?:'
    # $remailer{"dizum"} = "<remailer@dizum.com> cpunk max mix pgp ek";
    r'\$remailer\{"(?P<name>[a-z0-9][\w-]*)"\}[ \t]=[ \t]'
    r'"<(?P<email>[\w.+-]+@[\w.-]+)>(?P<options>(?:[ \t][\w-]+)*)";'
    r'|'
    # Last update: Sat 05 Oct 2019 12:00:01 GMT
    r'Last[ \t]update:[ \t](?P<date>[A-Z][a-z]{2}[ \t]\d{1,2}[ \t][A-Z][a-z]{2}[ \t]\d{4}[ \t]\d{2}:\d{2}:\d{2}[ \t][A-Z]{3,4})'
    r'|'
    # dizum    remailer@dizum.com    ****+*******  1:23:45  99.98%
    r'(?P<stats_name>[a-z0-9][\w-]*)[ \t]+(?P<stats_email>[\w.+-]+@[\w.-]+)[ \t]+'
    r'(?:[*?+\-#._]+(?:[ \t]+[*?+\-#._]+)*[ \t]+)?(?P<latency>[\d:]*\d)[ \t]+(?P<uptime>[\d.]+)%'
    r')[ \t\r]*$',
    re.M)

LATENCY_PATTERN = re.compile(
    r'^(?:(?P<hours>\d+):)?(?P<minutes>[0-5]?\d):(?P<seconds>[0-5]\d)$')


@attr.s(frozen=True)
class IdentityRecord(object):
    """
    a relay's canonical listing line
    """
    name = attr.ib()
    email = attr.ib()
    options = attr.ib(converter=frozenset, default=frozenset())


@attr.s(frozen=True)
class FreshnessRecord(object):
    """
    feed wide "Last update" stamp; describes no relay
    """
    date = attr.ib()


@attr.s(frozen=True)
class StatsRecord(object):
    """
    a relay's runtime statistics line
    """
    name = attr.ib()
    email = attr.ib()
    latency = attr.ib(validator=attr.validators.instance_of(timedelta), default=timedelta(0))
    uptime = attr.ib(validator=attr.validators.instance_of(float), default=0.0)


def parse_latency(token):
    """
    parse a "[[h:]m:]ss" latency token into a timedelta.
    anything not matching the grammar is worth zero seconds.
    """
    match = LATENCY_PATTERN.match(token.strip())
    if match is None:
        log.debug("unparsable latency %r, using zero", token)
        return timedelta(0)
    hours = int(match.group('hours') or 0)
    minutes = int(match.group('minutes'))
    seconds = int(match.group('seconds'))
    try:
        return timedelta(seconds=hours * 3600 + minutes * 60 + seconds)
    except OverflowError:
        log.debug("latency %r out of range, using zero", token)
        return timedelta(0)


def parse_uptime(token):
    """
    parse a decimal uptime percentage, 0.0 when malformed
    """
    try:
        uptime = float(token.strip().rstrip('%'))
    except ValueError:
        log.debug("unparsable uptime %r, using zero", token)
        return 0.0
    if not 0.0 <= uptime <= 100.0:
        log.debug("uptime %r out of range, using zero", token)
        return 0.0
    return uptime


def _record_from_match(match):
    if match.group('name') is not None:
        return IdentityRecord(
            name=match.group('name'),
            email=match.group('email'),
            options=match.group('options').split(),
        )
    if match.group('date') is not None:
        return FreshnessRecord(date=match.group('date'))
    return StatsRecord(
        name=match.group('stats_name'),
        email=match.group('stats_email'),
        latency=parse_latency(match.group('latency')),
        uptime=parse_uptime(match.group('uptime')),
    )


def parse_directory(text):
    """
    Lazily parse the directory feed.

    :param text: the feed, str or utf-8 encoded bytes.

    :returns: a generator of IdentityRecord, FreshnessRecord and
        StatsRecord instances in feed order.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise FeedParseError("directory feed is not valid utf-8") from e
    for match in DIRECTORY_PATTERN.finditer(text):
        yield _record_from_match(match)


def fetch_directory(source=DEFAULT_DIRECTORY_SOURCE, session=None, timeout=DEFAULT_FETCH_TIMEOUT):
    """
    Download the directory feed published under source.

    :param source: base URL of a remailer statistics site; the feed is
        looked up inside it whether or not it ends in a slash.

    :param session: a requests.Session, or anything with a compatible
        get().  When omitted a private session is opened and closed.

    :param timeout: seconds to wait on the network.

    :returns: the feed text.
    """
    if not source.endswith('/'):
        source += '/'
    url = urljoin(source, DIRECTORY_FILENAME)
    if session is None:
        with requests.Session() as session:
            return _get_feed(session, url, timeout)
    return _get_feed(session, url, timeout)


def _get_feed(session, url, timeout):
    log.debug("fetching relay directory from %s", url)
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FeedFetchError("cannot fetch relay directory from %s" % url) from e
    return response.text
