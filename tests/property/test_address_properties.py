"""
Property-based tests for directory address resolution.
"""

from hypothesis import given, strategies as st

from pyadsearch import DirectoryAddress, resolve_from_domain_name, resolve_from_hostname


# =============================================================================
# STRATEGIES
# =============================================================================

label_strategy = st.from_regex(r"[a-z][a-z0-9\-]{0,14}", fullmatch=True)
domain_strategy = st.lists(label_strategy, min_size=1, max_size=5).map(".".join)
host_strategy = st.from_regex(r"[a-z][a-z0-9\-\.]{0,30}", fullmatch=True)
port_strategy = st.integers(min_value=1, max_value=65535).map(str)


class TestDomainNameProperties:

    @given(domain_strategy)
    def test_dc_components(self, domain: str):
        """Property: each label becomes one DC= component, in order."""
        address = resolve_from_domain_name(domain)
        expected = ",".join("DC=" + part for part in domain.split("."))
        assert str(address) == "LDAP://" + expected
        assert not str(address).endswith(",")

    @given(domain_strategy)
    def test_domain_name_recovered(self, domain: str):
        """Property: the DNS name can be read back from the base DN."""
        assert resolve_from_domain_name(domain).domain_name == domain


class TestHostnameProperties:

    @given(domain_strategy, host_strategy, port_strategy)
    def test_round_trip(self, domain: str, host: str, port: str):
        """Property: host:port and the DC list parse back independently."""
        address = resolve_from_hostname(domain, host, port)
        text = str(address)
        assert text.startswith(f"LDAP://{host}:{port}/DC=")

        parsed = DirectoryAddress.parse(text)
        assert parsed == address
        assert (parsed.host, parsed.port) == (host, port)
        assert parsed.base_dn == resolve_from_domain_name(domain).base_dn
