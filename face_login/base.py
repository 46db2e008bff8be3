# coding: utf-8

"""
Base Orchestrator

Foundation class for the enrollment, verification and removal flows. Holds the
provider, the identity group settings, the activity indicator and the logger
every flow shares.
"""

import logging
from typing import Optional

from .activity import ActivityIndicator, default_indicator
from .config import FaceLoginSettings


def setup_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Setup a named logger with a console handler"""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


class BaseOrchestrator:
    """
    Base Orchestrator

    Common state for flows that run a sequence of Face API calls against the
    single identity group.
    """

    def __init__(
        self,
        provider,
        settings: Optional[FaceLoginSettings] = None,
        indicator: Optional[ActivityIndicator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize base orchestrator"""
        self.provider = provider
        self.settings = settings or FaceLoginSettings()
        # Settings are mutable dataclasses; recheck what the flows rely on
        self.settings.validate()
        self.indicator = indicator or default_indicator

        # Setup logger
        self.logger = logger or setup_logger(self.__class__.__name__, self.settings.log_level)

    @property
    def group_id(self) -> str:
        return self.settings.group_id

    @property
    def group_name(self) -> str:
        return self.settings.group_name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(group_id='{self.group_id}')"
