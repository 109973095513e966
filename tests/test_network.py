"""
Tests for NetworkConfig
"""
import dataclasses

import pytest

from tezwallet.constants import IdentityDefaults
from tezwallet.exceptions import InvalidNetworkConfigError
from tezwallet.network import IdentityRedirects, NetworkConfig, NetworkType


class TestDefaults:
    """Tests for the built-in network endpoints."""

    def test_mainnet_defaults(self, mainnet_config):
        """Should point every service at mainnet."""
        assert mainnet_config.network_type == NetworkType.MAINNET
        assert mainnet_config.network_name == "mainnet"
        assert mainnet_config.indexer_url == "https://api.tzkt.io"
        assert mainnet_config.identity.native == IdentityDefaults.NATIVE_REDIRECT
        mainnet_config.validate()

    def test_testnet_defaults(self, testnet_config):
        """Should point every service at the test network."""
        assert testnet_config.network_type == NetworkType.TESTNET
        assert testnet_config.network_name == "ghostnet"
        assert "ghostnet" in testnet_config.node_url
        testnet_config.validate()

    def test_defaults_accept_string(self):
        """Should accept the network type by value."""
        assert NetworkConfig.defaults("testnet").network_type == NetworkType.TESTNET

    def test_custom_has_no_defaults(self):
        """Should refuse to invent endpoints for custom networks."""
        with pytest.raises(InvalidNetworkConfigError):
            NetworkConfig.defaults(NetworkType.CUSTOM)

    def test_unknown_network(self):
        """Should reject unknown network names."""
        with pytest.raises(InvalidNetworkConfigError):
            NetworkConfig.defaults("moonnet")


class TestValidation:
    """Tests for structural validation."""

    def test_custom_config_valid(self, custom_config):
        """Should accept plain http endpoints for local networks."""
        custom_config.validate()

    def test_immutable(self, mainnet_config):
        """Should not allow changing endpoints in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            mainnet_config.node_url = "https://example.com"

    @pytest.mark.parametrize(
        "field_name,value",
        [
            ("node_url", "not a url"),
            ("node_url", ""),
            ("indexer_url", "ftp://api.tzkt.io"),
            ("metadata_url", "https://"),
            ("network_name", " "),
            ("node_url", "http://exa mple.com"),
            ("node_url", "http://localhost:99999"),
            ("indexer_url", "https://api.tzkt.io:0"),
        ],
    )
    def test_invalid_fields(self, mainnet_config, field_name, value):
        """Should name the offending field."""
        config = dataclasses.replace(mainnet_config, **{field_name: value})
        with pytest.raises(InvalidNetworkConfigError) as exc_info:
            config.validate()
        assert exc_info.value.field == field_name

    def test_unknown_network_type(self, mainnet_config):
        """Should keep unknown types until validation reports them."""
        config = dataclasses.replace(mainnet_config, network_type="moonnet")
        with pytest.raises(InvalidNetworkConfigError) as exc_info:
            config.validate()
        assert exc_info.value.field == "network_type"

    def test_invalid_browser_redirect(self, mainnet_config):
        """Should require an http(s) browser fallback redirect."""
        config = dataclasses.replace(
            mainnet_config,
            identity=IdentityRedirects(browser_fallback="tdsdk://redirect"),
        )
        with pytest.raises(InvalidNetworkConfigError) as exc_info:
            config.validate()
        assert exc_info.value.field == "identity.browser_fallback"

    def test_native_redirect_requires_scheme(self, mainnet_config):
        """Should require a scheme on the native redirect."""
        config = dataclasses.replace(
            mainnet_config,
            identity=IdentityRedirects(native="oauthCallback"),
        )
        with pytest.raises(InvalidNetworkConfigError):
            config.validate()

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost:8732",
            "http://127.0.0.1:8732",
            "http://[::1]:8732",
            "https://rpc.tzbeta.net",
        ],
    )
    def test_accepted_hosts(self, custom_config, url):
        """Should accept DNS names, IPv4 and IPv6 hosts with valid ports."""
        dataclasses.replace(custom_config, node_url=url).validate()
