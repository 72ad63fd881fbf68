"""Persistence: async engine, ORM models, repositories, migrations."""
