#!/usr/bin/env python3
"""
PyADSearch - Python Active Directory Search Tool
Query Active Directory over LDAP for SPNs, groups, users, computers or any
custom filter and print the results as JSON or aligned text.

License: MIT
"""

import argparse
import json
import os
import socket
import ssl
import struct
import sys
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple, Union
import logging

from ldap3 import (
    Server,
    Connection,
    Tls,
    ALL,
    DSA,
    ANONYMOUS,
    NTLM,
    SIMPLE,
    SUBTREE,
    SYNC,
    ALL_ATTRIBUTES,
    AUTO_BIND_NONE,
)
from ldap3.core.exceptions import LDAPException


# Constants
VERSION = "v0.1.0"
BANNER = f"""
╔═════════════════════════════════════════════════════════
║  PyADSearch {VERSION} - Python AD Search Tool
║  Query SPNs, groups, users, computers or custom filters
╚═════════════════════════════════════════════════════════
"""

PROTOCOL_PREFIX = "LDAP://"
LDAP_PORT = 389
LDAPS_PORT = 636
PAGED_RESULTS_OID = '1.2.840.113556.1.4.319'

# Built-in search filters
SPN_FILTER = "(servicePrincipalName=*)"
GROUP_FILTER = "(objectCategory=group)"
USER_FILTER = "(&(objectClass=user)(objectCategory=person))"
COMPUTER_FILTER = "(objectCategory=computer)"

CANNED_FILTERS = {
    'spns': SPN_FILTER,
    'groups': GROUP_FILTER,
    'users': USER_FILTER,
    'computers': COMPUTER_FILTER,
}

DEFAULT_ATTRIBUTES = ['cn']

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='[%(levelname)s] %(message)s'
)
logger = logging.getLogger('PyADSearch')


class PyADSearchError(Exception):
    """Base class for PyADSearch errors."""


class CommunicationError(PyADSearchError):
    """The directory server could not be reached, bound or searched."""


class DomainContextError(EnvironmentError):
    """The local machine's domain context could not be determined."""


def dn_to_fqdn(dn: str) -> str:
    """Convert Distinguished Name to FQDN."""
    if not dn:
        return ""
    parts = []
    for part in dn.split(','):
        if part.upper().startswith('DC='):
            parts.append(part[3:])
    return '.'.join(parts)


def domain_to_dc_list(domain: str) -> str:
    """Convert a DNS domain name to its DC= component list."""
    return ','.join(f"DC={part}" for part in domain.split('.'))


def sid_to_string(sid_bytes) -> str:
    """Convert binary SID to string representation."""
    if sid_bytes is None:
        return ""
    if isinstance(sid_bytes, str):
        return sid_bytes
    try:
        revision = sid_bytes[0]
        sub_auth_count = sid_bytes[1]
        authority = int.from_bytes(sid_bytes[2:8], byteorder='big')
        sub_auths = []
        for i in range(sub_auth_count):
            sub_auth = struct.unpack('<I', sid_bytes[8 + 4*i:12 + 4*i])[0]
            sub_auths.append(str(sub_auth))
        return f"S-{revision}-{authority}-" + '-'.join(sub_auths)
    except (IndexError, struct.error):
        return sid_bytes.hex()


# =============================================================================
# Addresses
# =============================================================================

@dataclass(frozen=True)
class DirectoryAddress:
    """An ADSI style directory root, e.g. LDAP://dc01:636/DC=corp,DC=local."""
    base_dn: str
    host: Optional[str] = None
    port: Optional[str] = None

    def __str__(self) -> str:
        if self.host and self.port:
            return f"{PROTOCOL_PREFIX}{self.host}:{self.port}/{self.base_dn}"
        if self.host:
            return f"{PROTOCOL_PREFIX}{self.host}/{self.base_dn}"
        return f"{PROTOCOL_PREFIX}{self.base_dn}"

    @classmethod
    def parse(cls, text: str) -> 'DirectoryAddress':
        """Split an LDAP:// path into host, port and base DN."""
        rest = text
        if rest.upper().startswith(PROTOCOL_PREFIX):
            rest = rest[len(PROTOCOL_PREFIX):]
        if '/' not in rest:
            return cls(base_dn=rest)
        host_port, base_dn = rest.split('/', 1)
        host, _, port = host_port.partition(':')
        return cls(base_dn=base_dn, host=host or None, port=port or None)

    @property
    def domain_name(self) -> str:
        return dn_to_fqdn(self.base_dn)

    @property
    def server_host(self) -> str:
        """Host to connect to; serverless paths fall back to the domain name."""
        return self.host or self.domain_name


def local_dns_domain() -> str:
    """Best effort lookup of the DNS domain the local machine belongs to."""
    domain = os.environ.get('USERDNSDOMAIN', '')
    if domain:
        return domain.lower()
    fqdn = socket.getfqdn()
    if '.' not in fqdn:
        return ''
    return fqdn.split('.', 1)[1]


def resolve_from_domain_name(domain: str) -> DirectoryAddress:
    return DirectoryAddress(base_dn=domain_to_dc_list(domain))


def resolve_from_hostname(domain: str, hostname: str, port: str) -> DirectoryAddress:
    # port is passed through untouched; a bad one fails on first search
    return DirectoryAddress(base_dn=domain_to_dc_list(domain), host=hostname, port=str(port))


def resolve_current_domain(client: Optional['DirectoryClient'] = None,
                           dns_domain: Optional[str] = None) -> DirectoryAddress:
    """Read defaultNamingContext from the RootDSE of the machine's domain."""
    if dns_domain is None:
        dns_domain = local_dns_domain()
    if not dns_domain:
        raise DomainContextError("Unable to determine current domain: machine does not appear to be domain joined")

    client = client or Ldap3Client()
    try:
        naming_context = client.read_default_naming_context(dns_domain)
    except (PyADSearchError, LDAPException, OSError) as e:
        raise DomainContextError(f"Unable to read RootDSE of {dns_domain}: {e}") from e

    if not naming_context:
        raise DomainContextError(f"RootDSE of {dns_domain} has no defaultNamingContext")

    logger.debug(f"Default naming context: {naming_context}")
    return DirectoryAddress.parse(PROTOCOL_PREFIX + naming_context)


# =============================================================================
# Sessions
# =============================================================================

@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    @classmethod
    def from_optional(cls, username: Optional[str], password: Optional[str]) -> Optional['Credentials']:
        """Credentials only exist when both parts were supplied."""
        if username and password:
            return cls(username, password)
        return None


class TransportPolicy(Enum):
    PLAIN = 'plain'
    SECURE = 'secure'


def transport_options(credentials: Optional[Credentials], policy: TransportPolicy) -> Dict[str, Any]:
    """Pick the socket and authentication flags for a bind."""
    if credentials is None:
        # anonymous binds are always plaintext
        return {'use_ssl': False, 'authentication': ANONYMOUS}
    if policy is TransportPolicy.SECURE:
        return {'use_ssl': True, 'authentication': NTLM}
    return {'use_ssl': False, 'authentication': SIMPLE}


class Session:
    """One directory session. Nothing touches the network until the first search."""

    def __init__(self, address: DirectoryAddress, credentials: Optional[Credentials],
                 policy: TransportPolicy, client: 'DirectoryClient'):
        self.address = address
        self.credentials = credentials
        self.policy = policy
        self.client = client
        self.connection: Optional[Connection] = None

    @property
    def options(self) -> Dict[str, Any]:
        return transport_options(self.credentials, self.policy)

    def close(self):
        """Close LDAP connection."""
        if self.connection is not None and not self.connection.closed:
            self.connection.unbind()
        self.connection = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        user = self.credentials.username if self.credentials else 'anonymous'
        return f"<Session {self.address} user={user} policy={self.policy.value}>"


class DirectoryClient(Protocol):
    """What the search pipeline needs from a directory client."""

    def bind(self, address: DirectoryAddress, credentials: Optional[Credentials],
             policy: TransportPolicy) -> Session: ...

    def search(self, session: Session, search_filter: str) -> List['RawResultEntry']: ...

    def read_default_naming_context(self, host: str) -> str: ...


class RawResultEntry(Protocol):

    def get_attribute(self, name: str) -> Any: ...

    def get_all_attributes(self) -> 'OrderedDict[str, List[Any]]': ...


def bind(address: DirectoryAddress, credentials: Optional[Credentials] = None,
         policy: TransportPolicy = TransportPolicy.SECURE,
         client: Optional[DirectoryClient] = None) -> Session:
    """Create a session for address; the bind itself is deferred."""
    client = client or Ldap3Client()
    return client.bind(address, credentials, policy)


# =============================================================================
# ldap3 client
# =============================================================================

def _collapse_values(values: Sequence[Any]) -> Any:
    """One value as a scalar, several as a list, none as None."""
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return list(values)


class Ldap3Entry:
    """Wraps an ldap3 Entry."""

    def __init__(self, entry):
        self.entry = entry

    @property
    def dn(self) -> str:
        return self.entry.entry_dn

    def get_all_attributes(self) -> 'OrderedDict[str, List[Any]]':
        attributes = OrderedDict()
        for name, values in self.entry.entry_attributes_as_dict.items():
            attributes[name] = list(values)
        return attributes

    def get_attribute(self, name: str) -> Any:
        # LDAP attribute names are case insensitive
        wanted = name.lower()
        for key, values in self.get_all_attributes().items():
            if key.lower() == wanted:
                return _collapse_values(values)
        return None

    def __repr__(self):
        return f"<Ldap3Entry {self.dn}>"


class Ldap3Client:
    """DirectoryClient backed by ldap3."""

    def __init__(self, page_size: int = 500, connect_timeout: Optional[float] = None,
                 verify_tls: bool = True, get_info=ALL, client_strategy=SYNC):
        self.page_size = page_size
        self.connect_timeout = connect_timeout
        self.verify_tls = verify_tls
        self.get_info = get_info
        self.client_strategy = client_strategy

    def bind(self, address: DirectoryAddress, credentials: Optional[Credentials],
             policy: TransportPolicy) -> Session:
        return Session(address, credentials, policy, client=self)

    def _bind_user(self, session: Session) -> str:
        user = session.credentials.username
        if session.options['authentication'] != NTLM or '\\' in user:
            return user
        # NTLM only takes DOMAIN\user, so rewrite UPNs and qualify bare names
        if '@' in user:
            name, _, domain = user.rpartition('@')
            return f"{domain}\\{name}"
        domain = session.address.domain_name
        if domain:
            user = f"{domain}\\{user}"
        return user

    def open_session(self, session: Session) -> Connection:
        """Build the Server and Connection objects for session without connecting."""
        options = session.options
        address = session.address
        if address.port:
            port = int(address.port)
        else:
            port = LDAPS_PORT if options['use_ssl'] else LDAP_PORT

        tls = None
        if options['use_ssl']:
            tls = Tls(validate=ssl.CERT_REQUIRED if self.verify_tls else ssl.CERT_NONE)

        server = Server(
            address.server_host,
            port=port,
            use_ssl=options['use_ssl'],
            get_info=self.get_info,
            tls=tls,
            connect_timeout=self.connect_timeout
        )

        if session.credentials is None:
            conn = Connection(
                server,
                authentication=ANONYMOUS,
                client_strategy=self.client_strategy,
                read_only=True,
                auto_bind=AUTO_BIND_NONE
            )
        else:
            conn = Connection(
                server,
                user=self._bind_user(session),
                password=session.credentials.password,
                authentication=options['authentication'],
                client_strategy=self.client_strategy,
                read_only=True,
                auto_bind=AUTO_BIND_NONE
            )
        session.connection = conn
        return conn

    def _ensure_bound(self, session: Session) -> Connection:
        conn = session.connection or self.open_session(session)
        if conn.bound:
            return conn
        if conn.closed:
            conn.open()
        if not conn.bind():
            raise CommunicationError(f"LDAP bind failed: {conn.result.get('description', conn.result)}")
        logger.debug(f"LDAP bind successful as {conn.user or 'anonymous'}")
        return conn

    def search(self, session: Session, search_filter: str) -> List[Ldap3Entry]:
        """Perform paged LDAP search."""
        try:
            conn = self._ensure_bound(session)
            base_dn = session.address.base_dn
            entries = []
            cookie = None
            while True:
                conn.search(
                    search_base=base_dn,
                    search_filter=search_filter,
                    search_scope=SUBTREE,
                    attributes=ALL_ATTRIBUTES,
                    paged_size=self.page_size,
                    paged_cookie=cookie
                )
                result = conn.result or {}
                if result.get('result', 0) != 0:
                    raise CommunicationError(f"LDAP search failed: {result.get('description')} {result.get('message', '')}".strip())

                entries.extend(Ldap3Entry(entry) for entry in conn.entries)

                # Handle paging
                controls = result.get('controls') or {}
                cookie = controls.get(PAGED_RESULTS_OID, {}).get('value', {}).get('cookie')
                if not cookie:
                    break
        except (LDAPException, ValueError, OSError) as e:
            raise CommunicationError(str(e)) from e

        return entries

    def read_default_naming_context(self, host: str) -> str:
        server = Server(host, get_info=DSA, connect_timeout=self.connect_timeout)
        conn = Connection(server, authentication=ANONYMOUS, client_strategy=self.client_strategy)
        try:
            conn.open()
            conn.bind()
            info = server.info
            if info is None or 'defaultNamingContext' not in info.other:
                return ''
            return str(info.other['defaultNamingContext'][0])
        finally:
            if not conn.closed:
                conn.unbind()


# =============================================================================
# Search
# =============================================================================

@dataclass
class SearchOutcome:
    """Entries found by a search, or the diagnostic explaining why it failed."""
    entries: List[Any] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __len__(self):
        return len(self.entries)


def search(session: Session, search_filter: str) -> SearchOutcome:
    """Run search_filter over the session's subtree. Never raises on server errors."""
    try:
        entries = session.client.search(session, search_filter)
    except (PyADSearchError, LDAPException, OSError) as e:
        diagnostic = f"Unable to communicate with AD server: {session.address.domain_name} ({e})"
        logger.error(diagnostic)
        return SearchOutcome(error=diagnostic)

    logger.debug(f"{search_filter} returned {len(entries)} entries")
    return SearchOutcome(entries=list(entries))


# =============================================================================
# Projection and rendering
# =============================================================================

@dataclass(frozen=True)
class Projection:
    """Either every attribute of an entry or a fixed list of attributes."""
    attributes: Tuple[str, ...] = ()
    full: bool = False

    @classmethod
    def all(cls) -> 'Projection':
        return cls(full=True)

    @classmethod
    def of(cls, attributes: Iterable[str]) -> 'Projection':
        return cls(attributes=tuple(attributes))


def project(entries: Iterable[RawResultEntry], projection: Projection) -> List['OrderedDict[str, Any]']:
    results = []
    for entry in entries:
        if projection.full:
            results.append(OrderedDict(entry.get_all_attributes()))
            continue
        row = OrderedDict()
        for name in projection.attributes:
            # missing attributes stay in the row as None
            row[name] = entry.get_attribute(name)
        results.append(row)
    return results


class OutputFormat(Enum):
    JSON = 'json'
    PLAIN = 'plain'


def _sanitize_value(value, name: str = ''):
    """Turn an attribute value into something json can serialize."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(v, name) for v in value]
    if isinstance(value, bytes):
        lowered = name.lower()
        if lowered == 'objectsid':
            return sid_to_string(value)
        if lowered == 'objectguid' and len(value) == 16:
            return str(uuid.UUID(bytes_le=value))
        return value.decode('utf-8', errors='replace')
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, datetime):
        return str(value)
    return str(value)


def format_value(value, name: str = '') -> str:
    """Text form of a value; None becomes an empty string."""
    value = _sanitize_value(value, name)
    if value is None:
        return ''
    if isinstance(value, list):
        return ', '.join(format_value(v, name) for v in value)
    return str(value)


def _format_lines(row: 'OrderedDict[str, Any]', width: int) -> List[str]:
    return [f"{key:<{width}} : {format_value(value, key)}" for key, value in row.items()]


def render(projected: List['OrderedDict[str, Any]'], output_format: OutputFormat,
           full: bool = False) -> Union[str, List[str]]:
    """Serialize projected results to a JSON document or to text lines."""
    if output_format is OutputFormat.JSON:
        document = [
            OrderedDict((key, _sanitize_value(value, key)) for key, value in row.items())
            for row in projected
        ]
        return json.dumps(document, indent=4, ensure_ascii=False)

    lines = []
    if not projected:
        return lines

    if full:
        for row in projected:
            width = max((len(key) for key in row), default=0)
            lines.extend(_format_lines(row, width))
        return lines

    # column width comes from the first result's keys
    width = max((len(key) for key in projected[0]), default=0)
    for row in projected:
        lines.extend(_format_lines(row, width))
    return lines


# =============================================================================
# Console output
# =============================================================================

def print_success(message: str, indent: int = 0):
    print(f"{'    ' * indent}[+] {message}")


def print_info(message: str):
    print(f"[*] {message}")


def print_error(message: str):
    print(f"[!] {message}", file=sys.stderr)


# =============================================================================
# Tool
# =============================================================================

@dataclass
class SearchConfig:
    """Configuration for an AD search run."""
    domain: str = ""
    hostname: str = ""
    port: str = ""
    username: str = ""
    password: str = ""
    insecure: bool = False
    json: bool = False
    mode: str = ""  # spns, groups, users, computers, search
    query: str = ""
    full: bool = False
    attributes: List[str] = field(default_factory=lambda: list(DEFAULT_ATTRIBUTES))
    output: str = ""
    page_size: int = 500
    connect_timeout: Optional[float] = None
    verify_tls: bool = True


class PyADSearch:
    """Main AD search class."""

    def __init__(self, config: SearchConfig, client: Optional[DirectoryClient] = None):
        self.config = config
        self.client = client or Ldap3Client(
            page_size=config.page_size,
            connect_timeout=config.connect_timeout,
            verify_tls=config.verify_tls
        )
        self.output_format = OutputFormat.JSON if config.json else OutputFormat.PLAIN
        self.attributes = list(config.attributes or DEFAULT_ATTRIBUTES)

        credentials = Credentials.from_optional(config.username, config.password)
        policy = TransportPolicy.PLAIN if config.insecure else TransportPolicy.SECURE

        if not config.domain:
            if credentials is not None:
                logger.warning("No domain given, credentials are ignored for the current domain")
            self.address = resolve_current_domain(self.client)
            credentials = None
        elif config.hostname:
            port = config.port
            if not port:
                port = str(LDAPS_PORT if transport_options(credentials, policy)['use_ssl'] else LDAP_PORT)
            self.address = resolve_from_hostname(config.domain, config.hostname, port)
        else:
            self.address = resolve_from_domain_name(config.domain)

        logger.info(f"Target: {self.address}")
        self.session = bind(self.address, credentials, policy, client=self.client)

    def list_spns(self):
        return self._list(CANNED_FILTERS['spns'], "Unable to obtain any Service Principal Names",
                          Projection.of(['servicePrincipalName']))

    def list_groups(self, full: bool = False):
        return self._list(CANNED_FILTERS['groups'], "Unable to obtain any groups", self._projection(full))

    def list_users(self, full: bool = False):
        return self._list(CANNED_FILTERS['users'], "Unable to obtain any users", self._projection(full))

    def list_computers(self, full: bool = False):
        return self._list(CANNED_FILTERS['computers'], "Unable to obtain any computers", self._projection(full))

    def list_custom_search(self, query: str, full: bool = False):
        return self._list(query, "Unable to carry out custom search", self._projection(full))

    def _projection(self, full: bool) -> Projection:
        return Projection.all() if full else Projection.of(self.attributes)

    def _list(self, search_filter: str, failure_message: str, projection: Projection):
        outcome = search(self.session, search_filter)
        if not outcome.ok:
            print_error(failure_message)
            return None

        logger.info(f"    Found {len(outcome)} entries")
        rendered = render(project(outcome.entries, projection), self.output_format, full=projection.full)
        self._emit(rendered)
        return rendered

    def _emit(self, rendered):
        if isinstance(rendered, str):
            print(rendered)
        else:
            for line in rendered:
                print_success(line, 1)

        if self.config.output:
            text = rendered if isinstance(rendered, str) else '\n'.join(rendered)
            with open(self.config.output, 'w', encoding='utf-8') as f:
                f.write(text)
                f.write('\n')
            logger.info(f"[*] Output written to {os.path.abspath(self.config.output)}")

    def run(self):
        """Run the configured search."""
        mode = self.config.mode
        if mode == 'spns':
            return self.list_spns()
        if mode == 'groups':
            return self.list_groups(self.config.full)
        if mode == 'users':
            return self.list_users(self.config.full)
        if mode == 'computers':
            return self.list_computers(self.config.full)
        if mode == 'search':
            return self.list_custom_search(self.config.query, self.config.full)
        raise PyADSearchError(f"Unknown search mode: {mode!r}")

    def close(self):
        self.session.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="PyADSearch - Python Active Directory Search Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Groups of the current domain
  %(prog)s --groups

  # Users of a remote domain over LDAPS with NTLM
  %(prog)s -d CORP.LOCAL --hostname dc01.corp.local -u admin -p password123 --users

  # Custom filter, selected attributes, JSON output
  %(prog)s -d CORP.LOCAL -u admin -p pass --insecure -s "(adminCount=1)" -a cn,mail --json
        """
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('--spns', action='store_const', const='spns', dest='mode',
                      help='Enumerate Service Principal Names')
    mode.add_argument('-G', '--groups', action='store_const', const='groups', dest='mode',
                      help='Enumerate groups')
    mode.add_argument('-U', '--users', action='store_const', const='users', dest='mode',
                      help='Enumerate users')
    mode.add_argument('-C', '--computers', action='store_const', const='computers', dest='mode',
                      help='Enumerate computers')
    mode.add_argument('-s', '--search', metavar='FILTER', dest='query',
                      help='Perform a custom LDAP search')

    parser.add_argument('-d', '--domain', default='',
                        help='Domain name (e.g., CORP.LOCAL); defaults to the current domain')
    parser.add_argument('--hostname', default='',
                        help='Domain Controller hostname or IP (requires --domain)')
    parser.add_argument('--port', default='',
                        help='LDAP port (default: 636, or 389 with --insecure/anonymous)')
    parser.add_argument('-u', '--username', default='',
                        help='Username for authentication')
    parser.add_argument('-p', '--password', default='',
                        help='Password for authentication')
    parser.add_argument('--insecure', action='store_true',
                        help='Use plaintext LDAP with a simple bind instead of LDAPS')
    parser.add_argument('--no-tls-verify', action='store_true',
                        help='Do not verify the server certificate for LDAPS')
    parser.add_argument('-f', '--full', action='store_true',
                        help='Dump every attribute of each result')
    parser.add_argument('-a', '--attributes', default=','.join(DEFAULT_ATTRIBUTES),
                        help='Comma-separated attributes to return (default: cn)')
    parser.add_argument('--json', action='store_true',
                        help='Output results as JSON')
    parser.add_argument('-o', '--output', default='',
                        help='Also write the results to this file')
    parser.add_argument('--page-size', type=int, default=500,
                        help='LDAP page size (default: 500)')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Connect timeout in seconds')
    parser.add_argument('--supress-banner', action='store_true',
                        help='Do not print the banner')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose output')
    return parser


def config_from_args(args: argparse.Namespace) -> SearchConfig:
    attributes = [a.strip() for a in args.attributes.split(',') if a.strip()]
    return SearchConfig(
        domain=args.domain,
        hostname=args.hostname,
        port=args.port,
        username=args.username,
        password=args.password,
        insecure=args.insecure,
        json=args.json,
        mode='search' if args.query else args.mode,
        query=args.query or '',
        full=args.full,
        attributes=attributes or list(DEFAULT_ATTRIBUTES),
        output=args.output,
        page_size=args.page_size,
        connect_timeout=args.timeout,
        verify_tls=not args.no_tls_verify,
    )


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.hostname and not args.domain:
        parser.error("--hostname requires --domain")
    if args.port and not args.hostname:
        parser.error("--port requires --hostname")

    if args.verbose:
        logger.setLevel(logging.DEBUG)

    if not args.supress_banner:
        print(BANNER)
        sys.stdout.flush()

    config = config_from_args(args)

    try:
        searcher = PyADSearch(config)
    except DomainContextError as e:
        logger.error(str(e))
        print_error("Use -d/--domain to target a domain explicitly")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("\n[!] Interrupted by user")
        sys.exit(1)

    try:
        searcher.run()
    except KeyboardInterrupt:
        logger.warning("\n[!] Interrupted by user")
        sys.exit(1)
    finally:
        searcher.close()


if __name__ == "__main__":
    main()
