"""HR Portal package.

This package is organized by feature modules (users, onboarding, attendance,
leave, ...) with a thin Flask controller layer over service and repository
layers backed by an in-memory mock database.
"""
