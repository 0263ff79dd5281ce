"""
Client for Runway Hosted Models.

:class:`HostedModel` exposes two main methods for talking to a model,
``info()`` and ``query(input_data)``, and two helpers for its awake state,
``is_awake()`` and ``wait_until_awake()``.

```python
model = HostedModel(HostedModelConfig(
  url="https://my-model.hosted-models.runwayml.cloud/v1",
  token="my-secret-token",  # only required for private models
))
model.wait_until_awake()
output = model.query({"prompt": "The one ring to", "max_characters": 180})
print(output["generated_text"])
```
"""

from __future__ import annotations

import errno
import logging
import re
import threading
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import requests

from hosted_models import settings
from hosted_models.errors import (
  InvalidArgumentError,
  InvalidURLError,
  ModelError,
  NetworkError,
  NotFoundError,
  PermissionDeniedError,
  UnexpectedError,
)
from hosted_models.settings import HostedModelConfig
from hosted_models.transport import delay, request_with_retry

logger = logging.getLogger(__name__)

V1_URL_PATTERN = re.compile(r"^https?://.+\.runwayml\.cloud/v1")
RESPONSE_CODES_TO_RETRY = (502, 429)


def _error_code(exc: BaseException) -> str:
  """
  Return a diagnostic code for a transport failure.

  ``requests`` wraps the socket error a few levels deep (urllib3's
  ``MaxRetryError.reason``, exception args, chained causes), so the symbolic
  errno name is searched for breadth-first. Falls back to the class name.
  """
  seen = set()
  pending: List[Any] = [exc]
  while pending:
    current = pending.pop(0)
    if not isinstance(current, BaseException) or id(current) in seen:
      continue
    seen.add(id(current))
    err_no = getattr(current, "errno", None)
    if isinstance(err_no, int) and err_no in errno.errorcode:
      return errno.errorcode[err_no]
    pending.extend(current.args)
    pending.extend([getattr(current, "reason", None), current.__cause__, current.__context__])
  return type(exc).__name__


class HostedModel:
  """
  A Runway Hosted Model reachable over HTTP.

  Parameters
  ----------
  config:
      A :class:`HostedModelConfig` or a mapping with ``url`` and optional
      ``token`` keys.
  session:
      Transport exposing ``request(method, url, **kwargs)``. Defaults to the
      ``requests`` module.
  timeout:
      Per-request timeout in seconds handed to the transport. ``None`` waits
      indefinitely; zero or negative values are rejected.
  max_attempts:
      Cap on resends of 502/429 responses. ``None`` resends without limit.
  sleep, clock:
      Timer primitives used by :meth:`wait_until_awake`.
  wake:
      Send a fire-and-forget request at construction so the model starts
      waking up before it is first used.
  """

  def __init__(
    self,
    config: Union[HostedModelConfig, Mapping[str, Any]],
    *,
    session: Optional[Any] = None,
    timeout: Optional[float] = None,
    max_attempts: Optional[int] = None,
    sleep: Callable[[float], None] = delay,
    clock: Callable[[], float] = time.monotonic,
    wake: bool = True,
  ) -> None:
    if isinstance(config, Mapping):
      config = HostedModelConfig(url=config.get("url") or "", token=config.get("token") or None)
    if not isinstance(config, HostedModelConfig):
      raise InvalidArgumentError("config")
    if not isinstance(config.url, str) or not V1_URL_PATTERN.match(config.url):
      raise InvalidURLError()
    if timeout is not None and timeout <= 0:
      raise InvalidArgumentError("timeout")
    if max_attempts is not None and max_attempts < 1:
      raise InvalidArgumentError("max_attempts")

    self._url = config.url.rstrip("/")
    self._headers: Dict[str, str] = {
      "Accept": "application/json",
      "Content-Type": "application/json",
    }
    if config.token:
      self._headers["Authorization"] = f"Bearer {config.token}"
    self._response_codes_to_retry = RESPONSE_CODES_TO_RETRY
    self._session = session
    self._timeout = timeout
    self._max_attempts = max_attempts
    self._sleep = sleep
    self._clock = clock

    logger.info("Hosted model client initialised - url: %s, private: %s", self._url, bool(config.token))

    if wake:
      # Wake the model now since it will probably be used soon.
      threading.Thread(target=self._wake, name="hosted-model-wake", daemon=True).start()

  @classmethod
  def from_env(cls, **kwargs: Any) -> "HostedModel":
    """Build a client from ``HOSTED_MODEL_*`` environment variables."""
    options = settings.load_client_options()
    options.update(kwargs)
    return cls(settings.load_config(), **options)

  @property
  def url(self) -> str:
    return self._url

  def root(self) -> Any:
    """Return the service status document from ``GET <url>/``."""
    return self._request("GET", f"{self._url}/")

  def info(self) -> Any:
    """
    Return the input/output description published by the model.

    Makes a GET request to the ``/v1/info`` route. The response shape is
    defined by the model and returned without validation.
    """
    return self._request("GET", f"{self._url}/info")

  def query(self, input_data: Mapping[str, Any]) -> Any:
    """
    Run the model on ``input_data`` and return its output.

    ``input_data`` is a mapping of input parameters; use :meth:`info` to
    find the keys a given model expects.
    """
    if not isinstance(input_data, Mapping):
      raise InvalidArgumentError("input")
    return self._request("POST", f"{self._url}/query", json=dict(input_data))

  def is_awake(self) -> bool:
    """Return ``True`` if the model is awake, ``False`` while it is still waking up."""
    body = self.root()
    return isinstance(body, dict) and body.get("status") == "running"

  def wait_until_awake(
    self,
    poll_interval: Optional[float] = None,
    *,
    timeout: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
  ) -> bool:
    """
    Block until the model is awake.

    Never required, since ``info`` and ``query`` always resolve eventually,
    but handy for holding back UI until requests will answer promptly.

    Polls :meth:`is_awake` every ``poll_interval`` seconds (default from
    ``HOSTED_MODEL_POLL_INTERVAL``, else one second). Returns ``True`` once
    awake. Returns ``False`` if ``cancel_event`` gets set or ``timeout``
    seconds pass first. Errors raised by a poll propagate immediately; a
    negative ``poll_interval`` raises :class:`InvalidArgumentError` up front.
    """
    interval = settings.poll_interval() if poll_interval is None else poll_interval
    if interval < 0:
      raise InvalidArgumentError("poll_interval")
    deadline = None if timeout is None else self._clock() + timeout
    polls = 0
    while True:
      if cancel_event is not None and cancel_event.is_set():
        logger.debug("Stopped waiting for %s: cancelled after %d polls", self._url, polls)
        return False
      polls += 1
      if self.is_awake():
        logger.debug("%s is awake after %d polls", self._url, polls)
        return True
      if deadline is not None and self._clock() + interval > deadline:
        logger.debug("Stopped waiting for %s: timed out after %d polls", self._url, polls)
        return False
      self._sleep(interval)

  def _wake(self) -> None:
    try:
      self.root()
    except Exception as exc:
      logger.debug("Wake-up request to %s failed: %s", self._url, exc)

  def _request(self, method: str, url: str, **kwargs: Any) -> Any:
    try:
      response = request_with_retry(
        self._response_codes_to_retry,
        method,
        url,
        session=self._session,
        max_attempts=self._max_attempts,
        headers=self._headers,
        timeout=self._timeout,
        **kwargs,
      )
    except requests.RequestException as exc:
      raise NetworkError(_error_code(exc)) from exc

    if self._is_error_response(response):
      logger.debug("%s %s failed with status %s", method, url, response.status_code)
      if response.status_code == 401:
        raise PermissionDeniedError()
      if response.status_code == 404:
        raise NotFoundError()
      if response.status_code == 500:
        raise ModelError()
      raise UnexpectedError()

    try:
      return response.json()
    except ValueError as exc:
      raise UnexpectedError() from exc

  @staticmethod
  def _is_error_response(response: requests.Response) -> bool:
    content_type = response.headers.get("Content-Type") or ""
    return "application/json" not in content_type or not 200 <= response.status_code < 300


__all__ = ["HostedModel", "RESPONSE_CODES_TO_RETRY", "V1_URL_PATTERN"]
