"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps
(payments, marketplace). It holds no domain-specific logic:

- Generic, reusable base classes
- Clear extension points for domain apps

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes

Usage:
    from core.models import BaseModel
    from core.model_mixins import UUIDPrimaryKeyMixin
    from core.exceptions import BaseApplicationError

    class Order(UUIDPrimaryKeyMixin, BaseModel):
        status = models.CharField(max_length=20)

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

# Exceptions (no Django dependencies)
from .exceptions import BaseApplicationError

__all__ = [
    "BaseApplicationError",
]
