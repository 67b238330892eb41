# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Configuration module for loading and parsing configuration files

# Standard library imports
import logging

from pathlib import Path
from typing import Dict, List, Optional, Union

# Third-party imports
import yaml

from pydantic import BaseModel, Field, field_validator

# Local/package imports
from ziggiz_courier_dropoff_syslog.model import Facility, Severity


class LoggerConfig(BaseModel):
    """
    Configuration for individual loggers.

    Attributes:
        name (str): Logger name.
        level (str): Logging level (default: "INFO").
        propagate (bool): Whether to propagate logs to parent (default: True).
    """

    name: str
    level: str = "INFO"
    propagate: bool = True


class StructuredDataConfig(BaseModel):
    """
    Configuration for one RFC 5424 structured data element.

    Attributes:
        id (str): The SD-ID, e.g. "exampleSDID@32473".
        params (Dict[str, str]): Parameter names and values.
    """

    id: str
    params: Dict[str, str] = Field(default_factory=dict)


class Config(BaseModel):
    """
    Main configuration class for the Ziggiz Courier Dropoff Syslog sender.

    This class defines the collector address, the message fields used by the
    command line sender, tracing and logging options.
    """

    # Collector configuration
    host: str = "127.0.0.1"
    port: int = 514
    send_timeout: Optional[float] = None  # Socket send timeout in seconds

    # Message configuration
    message_format: str = "both"  # "rfc3164", "rfc5424", or "both"
    app_name: str = "ziggiz-courier"
    hostname: Optional[str] = None  # None means use this machine's name
    facility: str = "user"
    severity: str = "informational"
    proc_id: Optional[str] = None  # RFC 5424 only
    msg_id: Optional[str] = None  # RFC 5424 only
    structured_data: List[StructuredDataConfig] = Field(
        default_factory=list  # RFC 5424 only, rendered in list order
    )

    # Tracing configuration
    enable_tracing: bool = False  # Export send spans to the console

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    loggers: List[LoggerConfig] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is a valid Python logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that the port is a usable UDP port number."""
        if not 1 <= v <= 65535:
            raise ValueError(f"Invalid port: {v}. Must be between 1 and 65535")
        return v

    @field_validator("send_timeout")
    @classmethod
    def validate_send_timeout(cls, v: Optional[float]) -> Optional[float]:
        """Validate that the send timeout, when set, is not negative."""
        if v is not None and v < 0:
            raise ValueError(f"Invalid send timeout: {v}. Must not be negative")
        return v

    @field_validator("message_format")
    @classmethod
    def validate_message_format(cls, v: str) -> str:
        """Validate that the message format is valid."""
        valid_formats = ["rfc3164", "rfc5424", "both"]
        v = v.lower()
        if v not in valid_formats:
            raise ValueError(
                f"Invalid message format: {v}. Must be one of {valid_formats}"
            )
        return v

    @field_validator("facility")
    @classmethod
    def validate_facility(cls, v: str) -> str:
        """Validate the facility keyword and normalise it, e.g. "LOCAL0" -> "local0"."""
        return Facility.from_name(v).keyword

    @field_validator("severity")
    @classmethod
    def validate_severity(cls, v: str) -> str:
        """Validate the severity keyword and normalise it, e.g. "info" -> "informational"."""
        return Severity.from_name(v).keyword

    @property
    def formats(self) -> List[str]:
        if self.message_format == "both":
            return ["rfc3164", "rfc5424"]
        return [self.message_format]


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load the sender configuration from a YAML file.

    Without an explicit path the first existing file of these is used:

        ./config.yaml
        ./config.yml
        ./examples/config_basic.yaml
        /etc/ziggiz-courier-dropoff-syslog/config.yaml
        /etc/ziggiz-courier-dropoff-syslog/config.yml

    If none exists the defaults are returned and a warning is logged. An empty
    file also yields the defaults.

    Args:
        config_path: Path to the configuration file. It must exist when given.

    Returns:
        A Config object containing the loaded configuration.

    Raises:
        FileNotFoundError: If an explicit configuration file does not exist.
        pydantic.ValidationError: If a value fails validation.
        yaml.YAMLError: If the configuration file contains invalid YAML.
    """
    # Default search paths
    search_paths = [
        Path.cwd() / "config.yaml",
        Path.cwd() / "config.yml",
        Path.cwd() / "examples" / "config_basic.yaml",
        Path("/etc/ziggiz-courier-dropoff-syslog/config.yaml"),
        Path("/etc/ziggiz-courier-dropoff-syslog/config.yml"),
    ]

    # If config path is provided, try that first
    if config_path:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
    else:
        # Try default paths
        for path in search_paths:
            if path.exists():
                config_file = path
                break
        else:
            # No config file found, return default configuration
            logging.warning("No configuration file found, using default configuration")
            return Config()

    # Load YAML configuration
    with open(config_file, "r") as f:
        try:
            config_data = yaml.safe_load(f) or {}
            return Config(**config_data)
        except yaml.YAMLError as e:
            logging.error("Error parsing configuration file", extra={"error": e})
            raise
        except Exception as e:
            logging.error("Error loading configuration", extra={"error": e})
            raise


def configure_logging(config: "Config") -> None:
    """
    Configure logging based on the provided configuration.

    Args:
        config: The loaded configuration object.
    """
    # Reset logging configuration
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    # Configure root logger
    level = getattr(logging, config.log_level, logging.INFO)
    formatter = logging.Formatter(config.log_format, datefmt=config.log_date_format)

    # Add console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logging.root.setLevel(level)
    logging.root.addHandler(console_handler)

    # Configure additional loggers from config
    for logger_config in config.loggers:
        logger = logging.getLogger(logger_config.name)
        logger.setLevel(getattr(logging, logger_config.level, logging.INFO))
        logger.propagate = logger_config.propagate
