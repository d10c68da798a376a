"""HR attendance, leave and salary backend.

This package is organized by feature modules (attendance, leaves, payroll,
reports, users, projects, notifications) with a thin Flask controller layer
and service/repository layers underneath.
"""
