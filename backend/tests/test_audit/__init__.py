"""
Audit Test Suite

This package contains tests organized by audit categories:
- Workflow audit (W-01 to W-05): End-to-end status/history scenarios
- Schema audit: Alembic migrations agree with the ORM models
"""
