# backend/modules/feedback/models/__init__.py

from .feedback_models import Review

__all__ = ["Review"]
