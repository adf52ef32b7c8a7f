"""
Core calendar primitives, rule models, and invariants.

This module contains the foundational building blocks that are independent
of the predicate algebra: date normalization, the error taxonomy, repetition
rule models and calendar arithmetic.
"""
