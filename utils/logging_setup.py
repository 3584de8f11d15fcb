"""
Logging setup driven by SystemConfig.
"""
import logging
from typing import List

from interfaces.configuration_interface import SystemConfig


def configure_logging(system_config: SystemConfig) -> None:
    """
    Configure root logging from the system configuration section.

    Installs a stream handler and, when log_file is set, a file handler.
    Calling it again replaces previously installed handlers.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if system_config.log_file:
        handlers.append(logging.FileHandler(system_config.log_file))

    logging.basicConfig(
        level=getattr(logging, system_config.log_level.upper(), logging.INFO),
        format=system_config.log_format,
        handlers=handlers,
        force=True,
    )
