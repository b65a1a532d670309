"""Shared infrastructure: configuration, exceptions, events, logging, CLI."""
