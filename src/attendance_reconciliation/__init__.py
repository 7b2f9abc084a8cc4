"""Attendance reconciliation package.

Turns shift assignments, shift templates and raw clock events into daily
attendance records and a list of flagged attendance exceptions. Organized by
feature modules (shifts, events, attendance, anomalies, lifecycle, ...) with a
pure engine core and thin repository/controller layers around it.
"""
