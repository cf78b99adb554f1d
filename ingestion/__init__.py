"""
Data Ingestion Module

Handles fetching and validating data from external sources:
- yfinance for daily close prices
- Financial Modeling Prep for daily closes and annual financial ratios
"""

__version__ = "0.1.0"
