"""
Python client for Runway Hosted Models.

```python
from hosted_models import HostedModel

model = HostedModel({"url": "https://my-model.hosted-models.runwayml.cloud/v1"})
print(model.info())
```
"""

from .errors import (
  HostedModelError,
  InvalidArgumentError,
  InvalidURLError,
  ModelError,
  NetworkError,
  NotFoundError,
  PermissionDeniedError,
  UnexpectedError,
)
from .model import HostedModel
from .settings import HostedModelConfig

__version__ = "0.1.0"

__all__ = [
  "HostedModel",
  "HostedModelConfig",
  "HostedModelError",
  "InvalidArgumentError",
  "InvalidURLError",
  "ModelError",
  "NetworkError",
  "NotFoundError",
  "PermissionDeniedError",
  "UnexpectedError",
]
