"""
Boodschappen - Source Package

A local grocery ledger with a small chat interpreter that understands
short Dutch (and some English) commands.

DESIGN PRINCIPLES:
1. The ledger is the single source of truth
2. Every monetary step is rounded to cents immediately
3. The chat never raises, it always answers
4. Storage and settings are injected, never global
"""

__version__ = "1.0.0"
__author__ = "Boodschappen Team"
