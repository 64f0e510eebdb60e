import pathlib
from dataclasses import dataclass

from libb import ConfigOptions

__all__ = ['RegistryOptions']


@dataclass
class RegistryOptions(ConfigOptions):
    """Options

    Type extension options:
    - config_file: JSON file declaring extra wire types (default: None)
    - search_default_locations: Look for an extension file in the default
      locations when no config_file is given (default: True)
    """
    config_file: str = None
    search_default_locations: bool = True

    def __post_init__(self):
        if self.config_file and not pathlib.Path(self.config_file).expanduser().is_file():
            raise ValueError(f'config_file does not exist: {self.config_file}')
