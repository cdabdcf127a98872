"""
Core domain models, mathematical primitives, and invariants.

Fixed-point value type, its scale/radix/rep units, shift and overflow
primitives, and the serialisation contract. Independent of any column
storage or dataframe library.
"""
