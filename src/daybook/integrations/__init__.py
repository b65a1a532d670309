"""Clients for externally hosted services."""
