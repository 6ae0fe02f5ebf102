"""Unit domain package.

This package contains unit identifiers (`UnitID`), unit metadata lookup (`UnitRegistry`)
and resolved units (`UnitType`), plus a bundled ISO 4217 dataset.
"""
