"""
Trade View package.

Groups timestamped trades into calendar periods, reduces each period to
volume and notional totals, and projects the result into chart-ready
structures.

Subpackages:
- buckets: Period key derivation and record grouping
- calculators: Per-bucket metric reduction
- builders: Series and hierarchical projections, palette helpers
- source: Record source adapter for the trades API
"""

__all__ = [
    "__doc__",
]
