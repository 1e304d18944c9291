"""
Core domain models, integer arithmetic, and decay evaluation.

This module contains the building blocks that are independent of external
systems (RPC nodes, order signing, transaction submission).
"""
