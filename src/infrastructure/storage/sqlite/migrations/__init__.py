"""Ledger database migrations and snapshot maintenance."""

from src.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    SnapshotInfo,
    create_backup,
    discover_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    list_snapshots,
    reset_snapshots,
    restore_backup,
    run_migrations,
    verify_schema_integrity,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "SnapshotInfo",
    "create_backup",
    "discover_migrations",
    "get_current_version",
    "get_migration_status",
    "initialize_database",
    "list_snapshots",
    "reset_snapshots",
    "restore_backup",
    "run_migrations",
    "verify_schema_integrity",
]
