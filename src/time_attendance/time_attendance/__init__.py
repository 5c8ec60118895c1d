"""Time & Attendance engine package.

Organized by feature modules (punches, shifts, hours, payroll, timesheets,
status) with a thin Flask controller layer over service/repository layers.
"""
