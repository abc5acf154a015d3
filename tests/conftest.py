"""
Pytest configuration and shared fixtures for PyADSearch tests.
"""

from collections import OrderedDict

import pytest

from pyadsearch import (
    CommunicationError,
    Credentials,
    DirectoryAddress,
    Session,
    TransportPolicy,
    resolve_from_domain_name,
)


class FakeEntry:
    """In-memory stand-in for a directory search result."""

    def __init__(self, **attributes):
        self.attributes = OrderedDict()
        for name, value in attributes.items():
            self.attributes[name] = value if isinstance(value, list) else [value]

    @classmethod
    def from_dict(cls, attributes):
        entry = cls()
        for name, value in attributes.items():
            entry.attributes[name] = value if isinstance(value, list) else [value]
        return entry

    def get_all_attributes(self):
        return OrderedDict((k, list(v)) for k, v in self.attributes.items())

    def get_attribute(self, name):
        for key, values in self.attributes.items():
            if key.lower() == name.lower():
                if not values:
                    return None
                return values[0] if len(values) == 1 else list(values)
        return None


class FakeDirectoryClient:
    """DirectoryClient double that serves canned entries per filter."""

    def __init__(self, results=None, naming_context="DC=corp,DC=example,DC=com", **kwargs):
        self.results = results or {}
        self.naming_context = naming_context
        self.fail = False
        self.sessions = []
        self.searches = []
        self.kwargs = kwargs

    def bind(self, address: DirectoryAddress, credentials, policy: TransportPolicy) -> Session:
        session = Session(address, credentials, policy, client=self)
        self.sessions.append(session)
        return session

    def search(self, session, search_filter):
        self.searches.append(search_filter)
        if self.fail:
            raise CommunicationError("The server is not operational")
        return list(self.results.get(search_filter, []))

    def read_default_naming_context(self, host):
        if self.naming_context is None:
            raise CommunicationError(f"Cannot contact {host}")
        return self.naming_context


# =============================================================================
# ENTRY FIXTURES
# =============================================================================


@pytest.fixture
def group_entries():
    return [
        FakeEntry(cn="Domain Admins", name="Domain Admins",
                  member=["CN=alice,CN=Users,DC=corp,DC=example,DC=com",
                          "CN=bob,CN=Users,DC=corp,DC=example,DC=com"]),
        FakeEntry(cn="Domain Users", name="Domain Users", mail="users@corp.example.com"),
        FakeEntry(cn="Backup Operators", name="Backup Operators"),
    ]


@pytest.fixture
def fake_client(group_entries):
    return FakeDirectoryClient(results={"(objectCategory=group)": group_entries})


# =============================================================================
# SESSION FIXTURES
# =============================================================================


@pytest.fixture
def address() -> DirectoryAddress:
    return resolve_from_domain_name("corp.example.com")


@pytest.fixture
def credentials() -> Credentials:
    return Credentials("admin", "P@ssw0rd123!")
