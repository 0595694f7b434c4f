"""Stored ZIP writer and sample-pack assembly."""
