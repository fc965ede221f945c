from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .archive.repository import ArchiveRepository
from .archive.service import ArchiveResetService
from .cleanings.repository import CleaningRepository
from .cleanings.service import CleaningService
from .core.constants import DEFAULT_PAYMENT_RATE
from .core.enums import Role
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .database.document_store import DocumentStore
from .database.memory_document_store import InMemoryDocumentStore
from .database.mysql_document_store import MySQLDocumentStore
from .identity.gate import RoleGate, load_role_map
from .identity.provider import DocumentIdentityProvider
from .identity.service import AuthService
from .machines.repository import MachineRepository
from .machines.service import MachineService
from .notifications.dispatcher import NotificationDispatcher
from .notifications.emailjs_client import EmailClient, EmailJSClient, EmailJSConfig
from .payroll.calculator.standard_calculator import StandardPayoutCalculator
from .rates.repository import PaymentRateRepository
from .rates.service import PaymentRateService
from .stats.service import StatsService
from .users.repository import UserRepository
from .users.service import CleanerService


@dataclass(frozen=True)
class Container:
    store: DocumentStore

    machines_repo: MachineRepository
    cleanings_repo: CleaningRepository
    users_repo: UserRepository
    rates_repo: PaymentRateRepository
    archive_repo: ArchiveRepository

    identity: DocumentIdentityProvider
    role_gate: RoleGate
    auth_service: AuthService
    machine_service: MachineService
    cleaning_service: CleaningService
    cleaner_service: CleanerService
    payment_rate_service: PaymentRateService
    archive_service: ArchiveResetService
    stats_service: StatsService
    dashboard_service: DashboardService
    notifier: NotificationDispatcher


def build_store(*, backend: str, db_config: Optional[dict] = None) -> DocumentStore:
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        return MySQLDocumentStore(conn)
    raise ValueError(f"Unknown store backend: {backend!r}")


def build_container(
    *,
    db_config: Optional[dict] = None,
    store_backend: str = "mysql",
    store: Optional[DocumentStore] = None,
    role_map: Optional[Mapping[str, Role]] = None,
    emailjs: Optional[dict] = None,
    email_client: Optional[EmailClient] = None,
    default_payment_rate: float = DEFAULT_PAYMENT_RATE,
) -> Container:
    store = store or build_store(backend=store_backend, db_config=db_config)

    machines_repo = MachineRepository(store)
    cleanings_repo = CleaningRepository(store)
    users_repo = UserRepository(store)
    rates_repo = PaymentRateRepository(store, default_rate=default_payment_rate)
    archive_repo = ArchiveRepository(store)

    identity = DocumentIdentityProvider(store)
    role_gate = RoleGate(role_map if role_map is not None else load_role_map(), users_repo)
    calculator = StandardPayoutCalculator(default_rate=default_payment_rate)

    email_config = EmailJSConfig.from_dict(emailjs)
    if email_client is None and email_config.is_configured:
        email_client = EmailJSClient(
            endpoint=email_config.endpoint,
            private_key=email_config.private_key,
            timeout=email_config.timeout,
        )

    auth_service = AuthService(identity, role_gate, users_repo)
    machine_service = MachineService(machines_repo)
    cleaning_service = CleaningService(cleanings_repo, users_repo, machines_repo)
    cleaner_service = CleanerService(users_repo, machines_repo, identity)
    payment_rate_service = PaymentRateService(rates_repo)
    archive_service = ArchiveResetService(cleanings_repo, archive_repo, calculator=calculator)
    stats_service = StatsService(machines_repo, cleanings_repo, users_repo, calculator=calculator)
    dashboard_service = DashboardService(
        cleanings_repo, payment_rate_service, archive_service, stats_service, cleaner_service
    )

    return Container(
        store=store,
        machines_repo=machines_repo,
        cleanings_repo=cleanings_repo,
        users_repo=users_repo,
        rates_repo=rates_repo,
        archive_repo=archive_repo,
        identity=identity,
        role_gate=role_gate,
        auth_service=auth_service,
        machine_service=machine_service,
        cleaning_service=cleaning_service,
        cleaner_service=cleaner_service,
        payment_rate_service=payment_rate_service,
        archive_service=archive_service,
        stats_service=stats_service,
        dashboard_service=dashboard_service,
        notifier=NotificationDispatcher(email_client, email_config),
    )
