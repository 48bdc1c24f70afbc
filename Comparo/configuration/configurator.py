#!/usr/bin/env python3
# coding: utf-8

"""
This module defines the functionalities needed to verify the integrity and completeness
of Comparo configuration files. Missing values are replaced with default ones,
while existing values are checked for type and consistency.
"""

import dataclasses
import os.path
import pprint
from logging import Logger
from typing import Union
import marshmallow
import rapidjson as json
import toml
import yaml
from ..exceptions import InvalidConfiguration
from ..utilities.log_utils import create_default_logger
from .configuration import ComparisonConfiguration


__author__ = "Luca Venturini"


def _read_configuration_file(filename: str) -> dict:

    with open(filename) as handle:
        if filename.endswith((".yaml", ".yml")):
            config = yaml.load(handle, Loader=yaml.SafeLoader)
        elif filename.endswith(".json"):
            config = json.loads(handle.read())
        else:
            config = toml.load(handle)
    if config is None:
        config = dict()
    if not isinstance(config, dict):
        raise InvalidConfiguration("The configuration file {} does not contain a mapping.".format(filename))
    return config


def load_and_validate_config(raw_configuration: Union[None, ComparisonConfiguration, str, dict],
                             logger=None) -> ComparisonConfiguration:
    """
    Function to load the configuration and check its consistency.

    :param raw_configuration: either the file name of the configuration or an initialised object to check and finalise.
    :type raw_configuration: (str | None | dict | ComparisonConfiguration)

    :param logger: optional logger to be used.
    :type logger: Logger

    :rtype: ComparisonConfiguration
    """

    if not isinstance(logger, Logger):
        logger = create_default_logger("to_json")

    try:
        if isinstance(raw_configuration, ComparisonConfiguration):
            config = raw_configuration
            config.check(logger=logger)
        elif raw_configuration is None or raw_configuration == '' or raw_configuration == dict():
            config = ComparisonConfiguration()
        elif isinstance(raw_configuration, dict):
            config = ComparisonConfiguration.Schema().load(raw_configuration)
        else:
            assert isinstance(raw_configuration, str), raw_configuration
            raw_configuration = os.path.abspath(raw_configuration)
            if not os.path.exists(raw_configuration) or os.stat(raw_configuration).st_size == 0:
                raise InvalidConfiguration("Configuration file {} not found!".format(raw_configuration))
            config = _read_configuration_file(raw_configuration)
            config["filename"] = raw_configuration
            try:
                config = ComparisonConfiguration.Schema().load(config)
            except marshmallow.exceptions.ValidationError as exc:
                logger.critical("The configuration file is invalid. Validation errors:\n%s\n\n",
                                pprint.pformat(exc.messages))
                raise
    except KeyboardInterrupt:
        raise
    except Exception as exc:
        logger.exception("Loading the configuration file failed with error:\n%s\n\n\n", exc)
        raise InvalidConfiguration("The configuration file passed is invalid. Please double check.")

    return config


def print_config(config: ComparisonConfiguration, out, output_format="yaml"):

    """
    Function to print out the configuration, in YAML, TOML or JSON format.

    :param config: the configuration to print
    :param out: the output handle
    :param output_format: one of "yaml", "toml", "json"
    """

    dumped = dataclasses.asdict(config)
    dumped.pop("filename", None)
    if output_format == "json":
        print(json.dumps(dumped, indent=2), file=out)
    elif output_format == "toml":
        # TOML has no null value
        dumped["log_settings"] = dict((key, val) for key, val in dumped["log_settings"].items()
                                      if val is not None)
        toml.dump(dumped, out)
    else:
        yaml.dump(dumped, out, default_flow_style=False)
