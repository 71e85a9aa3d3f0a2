"""Filesystem and inbound payload validation."""
