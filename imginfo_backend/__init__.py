"""Incremental image metadata analysis backend."""
