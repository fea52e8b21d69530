"""Absence Tracker package.

Organized by feature modules (entries, payroll, settings, transfer, ...)
with a thin Flask controller layer on top of plain service/repository layers.
"""
