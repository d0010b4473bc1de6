"""ASIST UP core package.

Organized by feature modules (kiosk, attendance, approvals, payroll, ...)
with a thin Flask controller layer over service/repository layers.
"""
