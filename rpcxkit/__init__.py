"""Helpers for RPC services: contexts, shared records, buffer pools, gzip, address utilities and a server stub generator."""

__version__ = "0.1.0"