"""
This module contains the configuration dataclasses and the functions used to load
and validate them from YAML/TOML/JSON files.
"""

from .configuration import ComparisonConfiguration
from .configurator import load_and_validate_config, print_config
