from directus_setup.backup.exporter import BackupRecord, backup_collection, backup_collections

__all__ = ["BackupRecord", "backup_collection", "backup_collections"]
