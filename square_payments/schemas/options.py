from dataclasses import dataclass
from typing import Literal

SquareEnvironmentName = Literal["sandbox", "production"]


@dataclass(frozen=True)
class SquarePluginOptions:
    """
    Square credentials handed to SquarePlugin.init().

    Get these from the Square Developer Dashboard. Nothing is validated
    here; values loaded through SquareSettings are checked on load.
    """
    access_token: str
    environment: SquareEnvironmentName
    location_id: str
