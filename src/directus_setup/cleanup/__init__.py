from directus_setup.cleanup.teardown import CleanupResult, TeardownEngine, clean

__all__ = ["CleanupResult", "TeardownEngine", "clean"]
