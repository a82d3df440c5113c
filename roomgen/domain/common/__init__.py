"""Shared domain abstractions."""

from .repository import AsyncRepository

__all__ = ["AsyncRepository"]
