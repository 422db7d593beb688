"""
Currency Converter - Source Package

A single-user currency converter built around a base-currency rate table.
Rates are kept in a flat file, every conversion is logged, and an admin
can add or remove currencies.

DESIGN PRINCIPLES:
1. Every rate is "1 unit = X units of the base currency"
2. The rate table owns its records; invariants hold after every call
3. Failures are typed outcomes, never crashes
4. Every conversion and change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "MBANK Converter Team"
