"""Example: use the service layer directly (no Flask).

Controllers are thin; the business rules live in the services.
"""

from src.cleaning_tracker.cleaning_tracker.container import build_container
from src.cleaning_tracker.cleaning_tracker.core.enums import Role
from src.cleaning_tracker.cleaning_tracker.users.model import CreateCleanerData


def main():
    container = build_container(store_backend="memory")

    created = container.machine_service.create_machine(
        current_role=Role.SUPERIOR_ADMIN, created_by="demo", name="Uppsala #1", location="Gränby", city="Uppsala"
    )
    cleaner = container.cleaner_service.create_cleaner(
        CreateCleanerData(
            name="Alice",
            email="alice@example.com",
            password="secret123",
            confirm_password="secret123",
            payment_rate=120,
            assigned_machine_id=created.data,
        ),
        created_by="demo",
        current_role=Role.ADMIN,
    )

    container.cleaning_service.log_cleaning(cleaner.data)
    container.cleaning_service.log_cleaning(cleaner.data)
    print([s.to_dict() for s in container.stats_service.get_machine_stats()])

    result = container.archive_service.archive_and_reset_cleanings(current_role=Role.ADMIN, paid_by="Demo Admin")
    print(result.message, result.data.to_dict())


if __name__ == "__main__":
    main()
