"""
Square Payment Plugin

Composes the Square credentials, client accessor and payment handler, and
registers the handler so the host can route payments to it.

Usage::

    plugin = SquarePlugin().init(
        SquarePluginOptions(
            access_token=os.environ["SQUARE_ACCESS_TOKEN"],
            environment="sandbox",
            location_id=os.environ["SQUARE_LOCATION_ID"],
        )
    )
    handler = plugin.registry.get("square-payment")

or, reading SQUARE_* variables, ``SquarePlugin.from_settings()``.
"""

from typing import Optional

from square_payments.core.config import SquareSettings, get_settings
from square_payments.core.logging import get_logger
from square_payments.integrations.payment_handlers.base import PaymentHandlerRegistry
from square_payments.integrations.square.client import ClientFactory, SquareClientProvider, build_square_client
from square_payments.integrations.square.handler import SquarePaymentHandler, TimeoutHook
from square_payments.integrations.square.timeouts import DEFAULT_TIMEOUT_SECONDS
from square_payments.schemas.options import SquarePluginOptions

logger = get_logger(__name__)


class SquarePlugin:
    """Owns the Square handler and the credentials it runs with."""

    def __init__(
        self,
        registry: Optional[PaymentHandlerRegistry] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        on_timeout: Optional[TimeoutHook] = None,
        client_factory: ClientFactory = build_square_client,
    ):
        self.client_provider = SquareClientProvider(client_factory=client_factory)
        self.payment_handler = SquarePaymentHandler(
            self.client_provider, timeout=timeout, on_timeout=on_timeout
        )
        self.registry = registry if registry is not None else PaymentHandlerRegistry()
        self.registry.register(self.payment_handler)

    def init(self, options: SquarePluginOptions) -> "SquarePlugin":
        """
        Store Square credentials for the handler.

        Must run before the host routes any payment here. Calling it again
        replaces the credentials and the cached client.
        """
        self.client_provider.configure(options)
        logger.info("square.plugin.initialized", environment=options.environment)
        return self

    @property
    def is_initialized(self) -> bool:
        return self.client_provider.is_configured

    @classmethod
    def from_settings(
        cls,
        settings: Optional[SquareSettings] = None,
        registry: Optional[PaymentHandlerRegistry] = None,
        on_timeout: Optional[TimeoutHook] = None,
        client_factory: ClientFactory = build_square_client,
    ) -> "SquarePlugin":
        settings = settings or get_settings()
        plugin = cls(
            registry=registry,
            timeout=settings.request_timeout_seconds,
            on_timeout=on_timeout,
            client_factory=client_factory,
        )
        return plugin.init(settings.to_options())
