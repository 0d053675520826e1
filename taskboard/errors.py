from __future__ import annotations

from typing import Any


class BoardError(Exception):
  """Base class for failures that map onto an HTTP response.

  ``message`` is always safe to show to a caller. ``dev`` carries the
  underlying detail and is only surfaced when ``settings.debug`` is on.
  """

  status_code: int = 500
  default_message: str = "Something went wrong. Please try again."

  def __init__(self, message: str | None = None, *, dev: Any = None) -> None:
    self.message = message or self.default_message
    self.dev = dev
    super().__init__(self.message)


class Malformed(BoardError):
  status_code = 422
  default_message = "Invalid inputs passed, please check your data."


class Unauthenticated(BoardError):
  status_code = 401
  default_message = "You need to login to perform the desired action."


class Unauthorized(BoardError):
  status_code = 403
  default_message = "You are not allowed to perform the desired action."


class NotFound(BoardError):
  status_code = 404
  default_message = "The requested resource could not be found."


class Unprocessable(BoardError):
  status_code = 422
  default_message = "The request could not be processed."


class ConstraintViolation(Unprocessable):
  default_message = "A uniqueness constraint was violated."


class StaleOrder(Unprocessable):
  default_message = "Order is out of date; reload and try again."


class Internal(BoardError):
  pass
