"""Factory base class and configuration loading helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml

from mixor_common.exceptions import ConfigurationError, NotFoundError

logger = logging.getLogger(__name__)


def load_config(source: Union[str, Path, dict]) -> dict:
    """Load a configuration dictionary from a file, YAML text or a dict.

    Args:
        source: Path to a ``.yaml``/``.yml``/``.json`` file, a string of
            YAML text, or an already loaded dictionary

    Returns:
        Configuration dictionary (a copy when a dict is given)

    Raises:
        NotFoundError: If a path is given and the file does not exist
        ConfigurationError: If the format is unsupported or the content is
            not a mapping
    """
    if isinstance(source, dict):
        return dict(source)

    if isinstance(source, Path) or (
        isinstance(source, str) and "\n" not in source and Path(source).suffix.lower() in (".yaml", ".yml", ".json")
    ):
        path = Path(source).resolve()
        if not path.exists():
            raise NotFoundError(f"Configuration file not found: {path}", context={"path": str(path)})

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported file format: {suffix}", context={"path": str(path)})
        logger.debug(f"Loaded configuration from {path}")
    else:
        data = yaml.safe_load(source)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(data).__name__}",
            context={"type": type(data).__name__},
        )
    return data


class FactoryBase:
    """Base class for factory objects.

    Factories that inherit from this should implement the create method.
    ``create_from`` accepts anything ``load_config`` understands.
    """

    def create(self, **config: Any) -> Any:
        """Create an object from configuration.

        Args:
            **config: Configuration parameters

        Returns:
            Created object
        """
        raise NotImplementedError("Subclasses must implement create method")

    def create_from(self, source: Union[str, Path, dict]) -> Any:
        """Create an object from a configuration file, YAML text or dict.

        Args:
            source: Configuration source (see ``load_config``)

        Returns:
            Created object
        """
        return self.create(**load_config(source))


__all__ = ["FactoryBase", "load_config"]
