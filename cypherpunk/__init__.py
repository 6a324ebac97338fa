"""
cypherpunk composes anonymous messages for chains of
cypherpunk (Type I) remailers
"""

from cypherpunk._metadata import __version__, __author__, __contact__
from cypherpunk._metadata import __license__, __copyright__, __url__

from cypherpunk.errors import CypherpunkError, FeedFetchError, FeedParseError, PGPError, KeyImportError
from cypherpunk.errors import ChainResolutionError, EncryptionError, EncodingError, ConfigError, FormatError

from cypherpunk.interfaces import IPGPBackend
from cypherpunk.directory import IdentityRecord, FreshnessRecord, StatsRecord
from cypherpunk.directory import parse_directory, parse_latency, parse_uptime, fetch_directory
from cypherpunk.directory import DEFAULT_DIRECTORY_SOURCE
from cypherpunk.relay import Relay, RelayRegistry
from cypherpunk.config import RelayConfig, load_relay_config, parse_relay_config
from cypherpunk.chain import ChainResolution, resolve, WILDCARD
from cypherpunk.onion import encrypt_chain, header_block, peel_layer
from cypherpunk.formatter import OutputFormat, CYPHERPUNK, MAILTO, EML, OUTPUT_FORMATS
from cypherpunk.formatter import format_envelope, render
from cypherpunk.gpg import GPGBackend
from cypherpunk.client import CypherpunkClient, ComposeResult

__all__ = [
    "CypherpunkError",
    "FeedFetchError",
    "FeedParseError",
    "PGPError",
    "KeyImportError",
    "ChainResolutionError",
    "EncryptionError",
    "EncodingError",
    "ConfigError",
    "FormatError",

    "IPGPBackend",

    "IdentityRecord",
    "FreshnessRecord",
    "StatsRecord",
    "Relay",
    "RelayRegistry",
    "RelayConfig",
    "ChainResolution",
    "OutputFormat",
    "GPGBackend",
    "CypherpunkClient",
    "ComposeResult",

    "parse_directory",
    "parse_latency",
    "parse_uptime",
    "fetch_directory",
    "load_relay_config",
    "parse_relay_config",
    "resolve",
    "encrypt_chain",
    "header_block",
    "peel_layer",
    "format_envelope",
    "render",

    "DEFAULT_DIRECTORY_SOURCE",
    "WILDCARD",
    "CYPHERPUNK",
    "MAILTO",
    "EML",
    "OUTPUT_FORMATS",

    "__version__", "__author__", "__contact__",
    "__license__", "__copyright__", "__url__",
]
