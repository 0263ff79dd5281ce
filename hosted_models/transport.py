"""
HTTP helpers shared by every hosted model request.

All outbound traffic goes through :func:`request_with_retry`, which resends a
request for as long as the endpoint answers with one of a configured set of
transient status codes.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, Optional

import requests

from hosted_models.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def delay(seconds: float) -> None:
  """Block the calling thread for ``seconds``."""
  time.sleep(seconds)


def request_with_retry(
  response_codes_to_retry: Iterable[int],
  method: str,
  url: str,
  *,
  session: Optional[requests.Session] = None,
  max_attempts: Optional[int] = None,
  **kwargs: Any,
) -> requests.Response:
  """
  Send a request, resending it immediately while the status is retryable.

  Parameters
  ----------
  response_codes_to_retry:
      Status codes that trigger a resend. Must contain at least one code.
  method, url:
      Passed straight to ``session.request``.
  session:
      Object exposing ``request(method, url, **kwargs)``, such as a
      ``requests.Session``. Defaults to the ``requests`` module itself.
  max_attempts:
      Upper bound on transport invocations. ``None`` resends without limit;
      when the bound is reached the last response is returned unchanged.
  kwargs:
      Extra keyword arguments for ``session.request`` (headers, json, timeout).

  There is no delay between attempts. Non-2xx responses are returned rather
  than raised, and ``requests.RequestException`` propagates untouched.
  """
  retry_codes = tuple(response_codes_to_retry)
  if not retry_codes:
    raise InvalidArgumentError("response_codes_to_retry")
  if max_attempts is not None and max_attempts < 1:
    raise InvalidArgumentError("max_attempts")

  http: Any = session if session is not None else requests
  attempt = 0
  while True:
    attempt += 1
    response = http.request(method, url, **kwargs)
    if response.status_code not in retry_codes:
      return response
    if max_attempts is not None and attempt >= max_attempts:
      logger.debug(
        "%s %s still returned %s after %d attempts; giving up",
        method, url, response.status_code, attempt,
      )
      return response
    logger.debug("%s %s returned %s; resending (attempt %d)", method, url, response.status_code, attempt + 1)


__all__ = ["delay", "request_with_retry"]
