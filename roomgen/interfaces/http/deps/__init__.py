"""Reusable FastAPI dependencies."""

from .services import (
    get_container,
    get_credit_ledger,
    get_job_store,
    get_orchestrator,
    get_status_reporter,
)

__all__ = [
    "get_container",
    "get_credit_ledger",
    "get_job_store",
    "get_orchestrator",
    "get_status_reporter",
]
