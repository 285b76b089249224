import yaml
import logging
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from . import constants
from .io.backends import RoutingBackend, create_router
from .io.stream import InputStream
from .io.transport import SyncContext, Transport, create_transport
from .utils.merge import deep_merge
from .exceptions import (
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigValidationError,
    PathNotFoundError,
)


logger = logging.getLogger(__name__)


class DeviceModel(BaseModel):
    """
        Class Config-Validation Model describe `device`
    """
    transport: constants.TransportKind = constants.DEFAULT_TRANSPORT
    root: Optional[str] = None
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode='after')
    def check_mirror_root(self) -> 'DeviceModel':
        """A mirror transport needs the directory holding the device contents"""
        if self.transport is constants.TransportKind.MIRROR and not self.root:
            raise ValueError("The 'mirror' transport requires a 'root' directory.")
        return self


class LogModel(BaseModel):
    """
        Class Config-Validation Model describe `log`
    """
    debug: bool = False
    levels: Dict[str, str] = Field(default_factory=dict)
    file: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """
        Class Config-Validation Model desribe top-level of config
    """
    encoding: str = constants.DEFAULT_ENCODING
    device: DeviceModel = Field(default_factory=DeviceModel)
    log: LogModel = Field(default_factory=LogModel)
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode='after')
    def check_encoding(self) -> 'ConfigModel':
        """Ensure the encoding is known to Python"""
        try:
            "".encode(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: '{self.encoding}'.")
        return self


class Config:
    """
    Loads and validates the tetherio.yml file using Pydantic models.

    Without a path the defaults apply. ``overrides`` are merged over the file
    contents before validation.
    """
    def __init__(
        self,
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        router: Optional[RoutingBackend] = None,
    ):
        self.path = config_path
        raw_data = self._load_raw_config(router) if config_path else {}
        if overrides:
            raw_data = deep_merge(raw_data, overrides)

        try:
            self.model = ConfigModel.model_validate(raw_data)
            logger.debug(f"Configuration model validated successfully: \n{self.model.model_dump_json(indent=2)}")
        except ValidationError as e:
            raise ConfigValidationError(f"Configuration validation failed:\n{e}")

    def _load_raw_config(self, router: Optional[RoutingBackend]) -> Dict[str, Any]:
        logger.info(f"Loading configuration from '{self.path}'...")
        try:
            with InputStream(self.path, router or create_router()) as stream:
                config_data = yaml.safe_load(stream.getvalue())
        except PathNotFoundError:
            raise ConfigFileMissingError(f"Configuration file not found at: {self.path}")
        except yaml.YAMLError as e:
            raise ConfigParsingError(f"Error parsing YAML file: {e}")
        if config_data is None:
            return {}
        if not isinstance(config_data, dict):
            raise ConfigParsingError("Configuration file must be a YAML document containing a dictionary.")
        logger.debug(f"Successfully parsed YAML from '{self.path}'.")
        return config_data

    @property
    def encoding(self) -> str:
        return self.model.encoding

    @property
    def device(self) -> DeviceModel:
        return self.model.device

    @property
    def log(self) -> LogModel:
        return self.model.log

    def create_transport(self) -> Transport:
        return create_transport(self.device.transport, self.device.root)

    def create_context(self) -> SyncContext:
        """Context connecting lazily with the configured transport"""
        return SyncContext(self.create_transport)
