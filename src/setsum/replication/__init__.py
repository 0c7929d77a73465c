"""Setsums over replicated transaction streams.

Public API:
    Transaction: pre-image / post-image row change
    ReplicaChecksum: running checksum with checkpoint and resume
"""
from setsum.replication.stream import ReplicaChecksum, Transaction

__all__ = ["ReplicaChecksum", "Transaction"]
