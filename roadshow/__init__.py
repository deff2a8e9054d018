"""
Roadshow Savings Tracker - Source Package

Tracks roadshow events ("shows"), compares the budget implied by the
booked nights and meeting days with what was actually spent, and works
out the salesman's commission on the savings.

DESIGN PRINCIPLES:
1. Figures are always derived, never stored
2. Every change is persisted immediately
3. Corrupt data never crashes the app
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Roadshow Savings Team"
