"""Paxos group leader core on asyncio: leader state, TrueTime commit wait, WAL and quorum write replication."""

__version__ = "0.1.0"