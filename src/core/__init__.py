"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the levy model
that are independent of any caller (UI, charts, reports).
"""
