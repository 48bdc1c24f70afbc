"""
Module which contains all functions related to logging.
"""


from dataclasses import field
import logging
import logging.handlers
import os
from typing import Optional
from marshmallow import validate
from marshmallow_dataclass import dataclass

__author__ = 'Luca Venturini'


formatter = logging.Formatter(
        "{asctime} - {name} - {filename}:{lineno} - {levelname} - {funcName} \
- {processName} - {message}",
        style="{"
        )


@dataclass
class LoggingConfiguration:
    log: Optional[str] = field(default=None, metadata={
        "metadata": {"description": "Optional log file. If unset, the log is printed to the standard error."},
        "allow_none": True
    })
    log_level: str = field(default="INFO", metadata={
        "metadata": {"description": "Verbosity of the log"},
        "validate": validate.OneOf(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    })


null_logger = logging.getLogger("null")
null_handler = logging.NullHandler()
null_handler.setFormatter(formatter)
null_logger.setLevel(logging.CRITICAL)
null_logger.addHandler(null_handler)


def create_null_logger(*args, **kwargs):
    """Static method to create a default logging instance for the loci.
    The default is a null handler (no log).

    :param instance: the instance used to derive a name for the logger. It must be either a string
    or a class instance with a __name__ attribute."""

    if len(args) > 0:
        null_special_logger = logging.getLogger(args[0])
        null_special_handler = logging.NullHandler()
        null_special_handler.setFormatter(formatter)
        null_special_logger.handlers = [null_special_handler]
        if "level" in kwargs:
            null_special_logger.setLevel(kwargs["level"])
        else:
            null_special_logger.setLevel(logging.CRITICAL)
        return null_special_logger

    return null_logger


def create_default_logger(name, level="WARN"):
    """Default logger
    :param name: string used to give a name to the logger.
    :type name: str

    :param level: level of the logger. Default: WARN
    """

    logger = logging.getLogger(name)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def create_queue_logger(name, logging_queue, level="WARNING"):
    """
    Create a logger which redirects all of its records to a queue-like object.
    Used inside worker processes, whose records are then emitted by a
    QueueListener in the parent process.

    :param name: name of the logger
    :param logging_queue: the queue to send the records to
    :param level: level of the logger. Default: WARNING
    :rtype: logging.Logger
    """

    handler = logging.handlers.QueueHandler(logging_queue)
    handler.setLevel(level)
    logger = logging.getLogger(name)
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False
    return logger


def create_logger_from_conf(conf, name="comparo", mode="a"):

    """
    Create a logger from the "log_settings" section of a configuration.

    :param conf: the configuration object
    :param name: name of the logger
    :param mode: mode to open the log file with
    """

    logger = logging.getLogger(name)
    handle = conf.log_settings.log
    if handle is None:
        handler = logging.StreamHandler()
    else:
        _log_folder = os.path.dirname(handle)
        if _log_folder and not os.path.exists(_log_folder):
            os.makedirs(_log_folder)
        handler = logging.FileHandler(handle, mode=mode)

    handler.setFormatter(formatter)
    logger.setLevel(conf.log_settings.log_level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger
