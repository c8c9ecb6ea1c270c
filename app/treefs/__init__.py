"""treefs - filesystem traversal, tree snapshots and bottom-up deletion.

Walks a directory into a depth-indexed snapshot, rebuilds the
parent/child hierarchy from it, streams descendants lazily with
consumer-driven cancellation, and removes whole trees deepest-first.
"""

__version__ = "0.1.0"
