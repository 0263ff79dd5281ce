"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from hosted_models import HostedModel, HostedModelConfig  # noqa: E402
from hosted_models.testing import StubSession, make_response  # noqa: E402

MODEL_URL = "https://lotr.hosted-models.runwayml.cloud/v1"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
  for name in (
    "HOSTED_MODEL_URL",
    "HOSTED_MODEL_TOKEN",
    "HOSTED_MODEL_TIMEOUT",
    "HOSTED_MODEL_POLL_INTERVAL",
    "HOSTED_MODEL_MAX_ATTEMPTS",
    "HOSTED_MODEL_WAIT",
    "LOG_LEVEL",
  ):
    monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sleeps():
  return []


@pytest.fixture
def make_model(sleeps):
  """Build a client around a scripted transport, with the wake probe off."""

  def _make(*outcomes, token=None, repeat_last=False, **kwargs):
    session = StubSession(*outcomes, repeat_last=repeat_last)
    kwargs.setdefault("sleep", sleeps.append)
    kwargs.setdefault("wake", False)
    model = HostedModel(HostedModelConfig(url=MODEL_URL, token=token), session=session, **kwargs)
    return model, session

  return _make


def status_response(status):
  return make_response(200, {"status": status})
