"""
Deploy Configuration — Parse CLOUD_DEPLOY_* environment variables.

Deployment is optional. It activates only when a host is configured:

    CLOUD_DEPLOY_HOST=app.example.com
    CLOUD_DEPLOY_USER=ubuntu           # optional
    CLOUD_DEPLOY_PATH=/var/www/app     # optional

Values may also come from a .env file in the project directory, which the
CLI loads before reading the environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_HOST = "CLOUD_DEPLOY_HOST"
ENV_USER = "CLOUD_DEPLOY_USER"
ENV_PATH = "CLOUD_DEPLOY_PATH"

DEFAULT_USER = "ubuntu"
DEFAULT_PATH = "/var/www/app"


@dataclass(frozen=True)
class DeployTarget:
    """Remote host to update after a push."""

    host: str
    user: str = DEFAULT_USER
    path: str = DEFAULT_PATH

    @property
    def destination(self) -> str:
        """ssh destination, e.g. ubuntu@app.example.com"""
        return f"{self.user}@{self.host}"

    @property
    def display_name(self) -> str:
        return f"{self.user}@{self.host}:{self.path}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Optional["DeployTarget"]:
        """Build the target from the environment, or None when no host is set."""
        env = os.environ if environ is None else environ

        host = env.get(ENV_HOST, "").strip()
        if not host:
            logger.debug(f"{ENV_HOST} unset, cloud deployment disabled")
            return None

        target = cls(
            host=host,
            user=env.get(ENV_USER, "").strip() or DEFAULT_USER,
            path=env.get(ENV_PATH, "").strip() or DEFAULT_PATH,
        )
        logger.debug(f"Loaded deployment target: {target.display_name}")
        return target
