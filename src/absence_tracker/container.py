from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DatabaseConnection, DBConfig
from .payroll.calculator.standard_calculator import StandardPayCalculator
from .payroll.service import PeriodAggregator
from .storage.memory_repository import InMemoryTrackerRepository
from .storage.mysql_repository import MySQLTrackerRepository
from .storage.repository import TrackerRepository
from .tracker.service import TrackerService
from .transfer.service import TransferService


@dataclass(frozen=True)
class Container:
    repository: TrackerRepository
    aggregator: PeriodAggregator
    tracker_service: TrackerService
    transfer_service: TransferService
    weekly_overview_limit: int = 16


def build_repository(*, backend: str, db_config: Optional[dict] = None) -> TrackerRepository:
    if backend == "memory":
        return InMemoryTrackerRepository()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        return MySQLTrackerRepository(conn)
    raise ValueError(f"Unknown storage backend: {backend!r}")


def build_container(
    *,
    repository: Optional[TrackerRepository] = None,
    backend: str = "memory",
    db_config: Optional[dict] = None,
    weekly_overview_limit: int = 16,
) -> Container:
    repository = repository or build_repository(backend=backend, db_config=db_config)
    aggregator = PeriodAggregator(calculator=StandardPayCalculator())

    tracker_service = TrackerService(repository, aggregator=aggregator)
    tracker_service.load()
    transfer_service = TransferService(tracker_service)

    return Container(
        repository=repository,
        aggregator=aggregator,
        tracker_service=tracker_service,
        transfer_service=transfer_service,
        weekly_overview_limit=int(weekly_overview_limit),
    )
