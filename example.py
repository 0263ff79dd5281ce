"""
Query a hosted text-generation model configured through the environment.

Set ``HOSTED_MODEL_URL`` (and ``HOSTED_MODEL_TOKEN`` for private models) in
the shell or a ``.env`` file, then run ``python example.py "The one ring to"``.
"""

from __future__ import annotations

import logging
import os
import sys

from hosted_models import HostedModel, HostedModelError

logger = logging.getLogger(__name__)


def main(prompt: str) -> int:
  level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").strip().upper(), None)
  logging.basicConfig(level=level if isinstance(level, int) else logging.INFO)
  try:
    model = HostedModel.from_env()
    if os.environ.get("HOSTED_MODEL_WAIT", "").strip().lower() in {"1", "true", "yes"}:
      model.wait_until_awake()
    result = model.query({"prompt": prompt, "max_characters": 180})
  except HostedModelError as exc:
    logger.error("%s", exc)
    return 1

  print(result.get("generated_text", result) if isinstance(result, dict) else result)
  return 0


if __name__ == "__main__":
  sys.exit(main(" ".join(sys.argv[1:]) or "The one ring to"))
