"""
Errors raised by :class:`hosted_models.model.HostedModel`.

Every error derives from :class:`HostedModelError`, so callers may catch the
whole family or branch on the concrete kind.
"""

from __future__ import annotations

from typing import Optional

SUPPORT_URL = "https://support.runwayml.com"


class HostedModelError(RuntimeError):
  """Base class for every error raised by a hosted model client."""


class PermissionDeniedError(HostedModelError):
  """Raised on 401: the model is private and the token is missing or wrong."""

  def __init__(self) -> None:
    super().__init__("Permission denied, this model is private. Did you include the correct token?")


class NotFoundError(HostedModelError):
  """Raised on 404: the url matches no model, or the model is not active."""

  def __init__(self) -> None:
    super().__init__('Model not found. Make sure the url is correct and that the model is "active".')


class ModelError(HostedModelError):
  """Raised on 500: the hosted model failed while processing the input."""

  def __init__(self) -> None:
    super().__init__(
      "The model experienced an error while processing your input. "
      "Double-check that you are sending properly formed input parameters in HostedModel.query(). "
      "You can use the HostedModel.info() method to check the input parameters the model expects. "
      f"If the error persists, contact support ({SUPPORT_URL})."
    )


class InvalidURLError(HostedModelError):
  """Raised at construction when the url is not a hosted model v1 url."""

  def __init__(self) -> None:
    super().__init__(
      "The url you've provided is not valid. Your Hosted Model url must be in the format "
      "https://my-model.hosted-models.runwayml.cloud/v1."
    )


class InvalidArgumentError(HostedModelError):
  """Raised before any network activity when an argument is malformed."""

  def __init__(self, argument_name: str) -> None:
    super().__init__(f'The required argument "{argument_name}" is invalid.')
    self.argument_name = argument_name


class NetworkError(HostedModelError):
  """
  Raised when the HTTP exchange could not be completed at all.

  ``code`` carries the transport's error code (e.g. ``ECONNREFUSED``) when one
  could be determined.
  """

  def __init__(self, code: Optional[str] = None) -> None:
    detail = f": {code}" if code else ""
    super().__init__(
      f"A network error has occurred{detail}. "
      "Please check your internet connection is working properly and try again."
    )
    self.code = code


class UnexpectedError(HostedModelError):
  """Raised for any erroneous response that matches no other kind."""

  def __init__(self) -> None:
    super().__init__(
      f"An unexpected error has occurred. Please try again later or contact support ({SUPPORT_URL})."
    )


__all__ = [
  "HostedModelError",
  "InvalidArgumentError",
  "InvalidURLError",
  "ModelError",
  "NetworkError",
  "NotFoundError",
  "PermissionDeniedError",
  "UnexpectedError",
]
