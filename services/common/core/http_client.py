import logging

import httpx

from .config import BaseAppConfig

logger = logging.getLogger(__name__)


class HttpClientFactory:
    """
    HTTP Client Factory for centralized SSL / proxy / redirect handling.
    """

    def __init__(self, config: BaseAppConfig):
        self.config = config

    def _apply_defaults(self, kwargs: dict) -> dict:
        verify = kwargs.pop("verify", None)

        # If verify is not explicitly provided, use config default
        if verify is None:
            verify = self.config.VERIFY_SSL
        if not verify:
            logger.debug("SSL verification disabled (VERIFY_SSL=False)")

        kwargs["verify"] = verify
        kwargs.setdefault("trust_env", self.config.HTTP_TRUST_ENV)
        kwargs.setdefault("follow_redirects", self.config.HTTP_FOLLOW_REDIRECTS)
        return kwargs

    def create_async_client(self, **kwargs) -> httpx.AsyncClient:
        """
        Create an httpx.AsyncClient with configured SSL verification.

        Args:
            **kwargs: Additional arguments for httpx.AsyncClient
        """
        return httpx.AsyncClient(**self._apply_defaults(kwargs))
