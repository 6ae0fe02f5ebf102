"""Domain package.

Value types for units, quantities and exchange rates. All of them are immutable and
safe to share between threads.
"""
