"""
Pair Comparison Engine Module

Compares two symbols from resolved price and ratio data:
- Date alignment and price ratio
- Paired daily returns
- Rolling correlation
- Beta/alpha regression with standard errors
- Extrema markers
- Fiscal-year ratio alignment
"""

__version__ = "0.1.0"
