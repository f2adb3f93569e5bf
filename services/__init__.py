"""
services/ - Business Logic Layer
================================
Aggregators and services built on the repositories. Derived values
(budget spend, goal progress, reports) are recomputed from transactions
on every call rather than maintained incrementally.
"""
