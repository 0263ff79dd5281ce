"""
Environment-driven configuration for hosted model clients.

Values are read from the process environment, after ``load_environment`` has
merged in the nearest ``.env`` file found from the working directory upwards
(existing variables win). Nothing is read at import time; every lookup
happens at call time so changes to the environment are picked up by the next
``load_config``/``load_client_options`` call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_POLL_INTERVAL = 1.0


@dataclass(frozen=True)
class HostedModelConfig:
  """
  Connection details for one hosted model.

  ```python
  # Private model
  HostedModelConfig(url="https://my-model.hosted-models.runwayml.cloud/v1", token="my-secret-token")

  # Public model
  HostedModelConfig(url="https://my-model.hosted-models.runwayml.cloud/v1")
  ```
  """

  url: str
  token: Optional[str] = None


def _safe_float(value: Optional[str], default: Optional[float]) -> Optional[float]:
  try:
    return float(value) if value else default
  except (TypeError, ValueError):
    return default


def _safe_int(value: Optional[str], default: Optional[int]) -> Optional[int]:
  try:
    return int(value) if value else default
  except (TypeError, ValueError):
    return default


def load_environment() -> None:
  """Merge the nearest ``.env`` at or above the working directory into ``os.environ``."""
  load_dotenv(find_dotenv(usecwd=True))


def load_config() -> HostedModelConfig:
  """Build a :class:`HostedModelConfig` from ``HOSTED_MODEL_URL``/``HOSTED_MODEL_TOKEN``."""
  load_environment()
  url = os.environ.get("HOSTED_MODEL_URL", "").strip()
  token = os.environ.get("HOSTED_MODEL_TOKEN", "").strip() or None
  return HostedModelConfig(url=url, token=token)


def load_client_options() -> Dict[str, Any]:
  """Return keyword arguments for ``HostedModel`` taken from the environment."""
  load_environment()
  max_attempts = _safe_int(os.environ.get("HOSTED_MODEL_MAX_ATTEMPTS"), None)
  if max_attempts is not None and max_attempts < 1:
    max_attempts = None
  timeout = _safe_float(os.environ.get("HOSTED_MODEL_TIMEOUT"), None)
  if timeout is not None and timeout <= 0:
    timeout = None
  return {
    "timeout": timeout,
    "max_attempts": max_attempts,
  }


def poll_interval() -> float:
  """Seconds between awake checks, from ``HOSTED_MODEL_POLL_INTERVAL``."""
  load_environment()
  value = _safe_float(os.environ.get("HOSTED_MODEL_POLL_INTERVAL"), DEFAULT_POLL_INTERVAL)
  if value is None or value < 0:
    return DEFAULT_POLL_INTERVAL
  return value


__all__ = [
  "DEFAULT_POLL_INTERVAL",
  "HostedModelConfig",
  "load_client_options",
  "load_config",
  "load_environment",
  "poll_interval",
]
