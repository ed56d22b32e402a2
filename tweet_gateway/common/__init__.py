from .component import ComponentFactory
from .config import BaseConfig, LoggingConfig, RootConfig, load_config
from .result import Err, Ok, Result

__all__ = [
    "BaseConfig",
    "ComponentFactory",
    "Err",
    "LoggingConfig",
    "Ok",
    "Result",
    "RootConfig",
    "load_config",
]
