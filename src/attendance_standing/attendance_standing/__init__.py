"""Attendance Standing package.

This package is organized by feature modules (records, aggregation, standing,
ranking, reports) with a thin Flask controller layer over plain services.
The engine itself is pure: rows in, dataclasses out.
"""
