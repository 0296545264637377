"""Youth ministry attendance tracker.

This package is organized by feature modules (students, attendance,
alerts, ...) with a thin Flask controller layer over service/repository
layers.
"""
