"""Referential integrity verification."""

from directus_setup.verify.verifier import (
    IntegrityVerifier,
    VerificationReport,
    verify,
)

__all__ = ["IntegrityVerifier", "VerificationReport", "verify"]
