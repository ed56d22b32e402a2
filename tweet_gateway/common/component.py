from __future__ import annotations

from typing import Any, Generic

from typing_extensions import Self

from tweet_gateway.common.config import TConf


class ComponentFactory(Generic[TConf]):
    """Base class for configurable components owning upstream resources."""

    # This is a class variable that will be set by subclasses
    _config_type: type[TConf]
    _instance_config: TConf

    def __init__(self, config: TConf) -> None:
        self._instance_config = config

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> Self:
        """Validate a configuration dictionary and build the component."""
        return cls(cls._config_type(**config))

    @property
    def config(self) -> TConf:
        return self._instance_config

    async def close(self) -> None:
        """Release upstream resources. Safe to call more than once."""

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
