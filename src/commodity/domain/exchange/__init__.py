"""Exchange domain package.

This package contains single-pair exchange rates (`ExchangeRate`) and dated rate
snapshots against a reference unit (`ExchangeRateTable`).
"""
