"""
Ledger Kernel

Read-side accounting core for a small-business books application:
- Typed records parsed at the storage boundary
- Decimal-only amount handling with 2-place output
- Structured JSON logging
- SQLAlchemy persistence collaborator (accounts, journals, documents)
"""

__version__ = "0.1.0"
