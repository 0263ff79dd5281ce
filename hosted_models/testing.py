"""
Offline stand-ins for the HTTP transport.

:class:`StubSession` replays a scripted sequence of responses (or raised
exceptions) so a :class:`~hosted_models.model.HostedModel` can be exercised
without a network connection, e.g. in tests or while developing against a
model that is not deployed yet.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import requests

logger = logging.getLogger(__name__)

Outcome = Union[requests.Response, BaseException]


def make_response(
  status_code: int = 200,
  body: Any = None,
  *,
  content_type: Optional[str] = "application/json",
  headers: Optional[Mapping[str, str]] = None,
) -> requests.Response:
  """
  Build a ``requests.Response`` as the transport would return it.

  ``body`` is JSON-encoded unless it is already ``str`` or ``bytes``.
  Passing ``content_type=None`` omits the ``Content-Type`` header.
  """
  response = requests.Response()
  response.status_code = status_code
  response.encoding = "utf-8"
  if content_type:
    response.headers["Content-Type"] = content_type
  response.headers.update(headers or {})

  if body is None:
    content = b""
  elif isinstance(body, bytes):
    content = body
  elif isinstance(body, str):
    content = body.encode("utf-8")
  else:
    content = json.dumps(body).encode("utf-8")
  response._content = content
  return response


class StubSession:
  """
  Scripted replacement for ``requests.Session``.

  Each call to :meth:`request` consumes the next outcome: a response is
  returned, an exception is raised. With ``repeat_last=True`` the final
  outcome is reused once the script runs out; otherwise an exhausted script
  raises ``AssertionError``. Every call is recorded in :attr:`calls`.
  """

  def __init__(self, *outcomes: Outcome, repeat_last: bool = False) -> None:
    self._outcomes: List[Outcome] = list(outcomes)
    self._repeat_last = repeat_last
    self._lock = threading.Lock()
    self.calls: List[Tuple[str, str, Dict[str, Any]]] = []

  @property
  def call_count(self) -> int:
    return len(self.calls)

  def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
    with self._lock:
      self.calls.append((method, url, kwargs))
      if len(self._outcomes) > 1 or (self._outcomes and not self._repeat_last):
        outcome = self._outcomes.pop(0)
      elif self._outcomes:
        outcome = self._outcomes[0]
      else:
        raise AssertionError(f"No scripted response left for {method} {url}")

    logger.debug("Stub transport answering %s %s", method, url)
    if isinstance(outcome, BaseException):
      raise outcome
    return outcome


__all__ = ["StubSession", "make_response"]
