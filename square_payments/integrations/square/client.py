"""
Square API client accessor

Builds one AsyncSquare client per credential set and hands it to the
payment handler.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from square import AsyncSquare
from square.environment import SquareEnvironment

from square_payments.core.logging import get_logger
from square_payments.schemas.options import SquarePluginOptions

from .errors import SquareConfigurationError

logger = get_logger(__name__)

ClientFactory = Callable[[SquarePluginOptions], Any]


def build_square_client(options: SquarePluginOptions) -> AsyncSquare:
    environment = (
        SquareEnvironment.PRODUCTION
        if options.environment == "production"
        else SquareEnvironment.SANDBOX
    )
    return AsyncSquare(token=options.access_token, environment=environment)


@dataclass(frozen=True)
class _ClientState:
    options: SquarePluginOptions
    client: Optional[Any] = None


class SquareClientProvider:
    """
    Memoized Square client.

    Options and client are replaced together, so a re-configure never
    leaves a client built from old credentials behind. Calls already in
    flight keep the client they were given.
    """

    def __init__(
        self,
        options: Optional[SquarePluginOptions] = None,
        client_factory: ClientFactory = build_square_client,
    ):
        self._client_factory = client_factory
        self._state: Optional[_ClientState] = _ClientState(options) if options else None

    @property
    def is_configured(self) -> bool:
        return self._state is not None

    @property
    def options(self) -> SquarePluginOptions:
        state = self._state
        if state is None:
            raise SquareConfigurationError()
        return state.options

    def configure(self, options: SquarePluginOptions) -> None:
        """Store new credentials and drop the cached client."""
        self._state = _ClientState(options)
        logger.info(
            "square.client.configured",
            environment=options.environment,
            location_id=options.location_id,
        )

    def acquire(self) -> Tuple[Any, SquarePluginOptions]:
        """
        Return the Square client together with the options it was built from.

        Raises:
            SquareConfigurationError: If configure() was never called
        """
        state = self._state
        if state is None:
            raise SquareConfigurationError()
        if state.client is None:
            client = self._client_factory(state.options)
            # Only cache if credentials were not swapped while building.
            if self._state is state:
                self._state = _ClientState(state.options, client)
            logger.debug("square.client.created", environment=state.options.environment)
            return client, state.options
        return state.client, state.options

    def get_client(self) -> Any:
        """Return the Square client, creating it on first use."""
        client, _ = self.acquire()
        return client
