"""Attendance & payroll package.

Feature modules (attendance, payroll, settings, ...) follow the same layering:
frozen dataclass models, Protocol repositories with a MySQL implementation,
service classes holding the business rules and a thin Flask controller layer.
"""
