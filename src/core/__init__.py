"""
Core domain models, integer math primitives, errors and contracts.

This module contains the foundational building blocks that are independent
of external systems (ledger, token program, storage backends).
"""
