"""
Reporting app: read-only aggregates over committed sales.
"""
