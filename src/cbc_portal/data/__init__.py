"""Static seed data for local development without a backend."""

from .fixtures import DEMO_EMAIL, DEMO_USER_ID, seed_tables

__all__ = ["DEMO_EMAIL", "DEMO_USER_ID", "seed_tables"]
