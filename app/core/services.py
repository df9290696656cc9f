"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for expected outcomes
- BaseService: Base class with common service utilities

Pattern Comparison:
    - ServiceResult: Use for expected outcomes, including recognized no-ops
    - Exceptions: Use for failures the caller must surface (upstream errors,
      configuration problems)

Usage:
    from core.services import BaseService, ServiceResult

    class AccountStore(BaseService):
        def upsert(self, user_id, **fields):
            with self.atomic():
                ...
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data

    Usage:
        result = reconcile(event, store)
        if result:
            outcome = result.data
    """

    success: bool
    data: T | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Example:
            return ServiceResult.success(ReconcileOutcome.APPLIED)
        """
        return cls(success=True, data=data)

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Services hold their collaborators (adapters, stores) as
          constructor arguments, never as module globals
        - Use ServiceResult for expected outcomes
        - Raise exceptions for failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger named after the service class."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """Execute operations in a database transaction."""
        with transaction.atomic():
            yield
