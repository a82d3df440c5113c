"""Service dependency providers backed by the application container."""

from fastapi import Depends, Request

from roomgen.core.container import ApplicationContainer
from roomgen.domain.credits import CreditLedger
from roomgen.domain.generations import GenerationOrchestrator, JobStore, StatusReporter


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_orchestrator(container: ApplicationContainer = Depends(get_container)) -> GenerationOrchestrator:
    return container.orchestrator


def get_status_reporter(container: ApplicationContainer = Depends(get_container)) -> StatusReporter:
    return container.status_reporter


def get_job_store(container: ApplicationContainer = Depends(get_container)) -> JobStore:
    return container.job_store


def get_credit_ledger(container: ApplicationContainer = Depends(get_container)) -> CreditLedger:
    return container.ledger


__all__ = [
    "get_container",
    "get_credit_ledger",
    "get_job_store",
    "get_orchestrator",
    "get_status_reporter",
]
