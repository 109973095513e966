"""Social login (identity provider) configuration for one network."""
from __future__ import annotations

from enum import Enum

from ..network import NetworkType
from .transport import NetworkService


class LoginProvider(str, Enum):
    """Login providers offered by the identity service."""

    GOOGLE = "google"
    APPLE = "apple"
    TWITTER = "twitter"
    REDDIT = "reddit"
    EMAIL = "email"


class IdentityClient:
    """
    Holds everything the identity provider needs to start a login on the
    active network. Nothing here performs I/O; the OAuth flow itself runs in
    the host application.

    Args:
        network_type: Network the derived wallet keys are used on
        network_service: Transport shared with the rest of the snapshot
        native_redirect_url: Redirect target for native app callbacks
        google_redirect_url: Redirect registered with Google
        browser_redirect_url: Web redirect used by every other provider
    """

    def __init__(
        self,
        network_type: NetworkType,
        network_service: NetworkService,
        native_redirect_url: str,
        google_redirect_url: str,
        browser_redirect_url: str,
    ):
        self.network_type = NetworkType(network_type)
        self.network_service = network_service
        self.native_redirect_url = native_redirect_url
        self.google_redirect_url = google_redirect_url
        self.browser_redirect_url = browser_redirect_url

    @property
    def build_id(self) -> str:
        return self.network_service.build_id

    @property
    def identity_network(self) -> str:
        """Key-derivation network name used by the identity service.

        Custom networks are development setups and use the test network.
        """
        if self.network_type == NetworkType.MAINNET:
            return "mainnet"
        return "testnet"

    def redirect_url_for(self, provider: LoginProvider | str) -> str:
        """Web redirect target for ``provider``."""
        if LoginProvider(provider) == LoginProvider.GOOGLE:
            return self.google_redirect_url
        return self.browser_redirect_url
