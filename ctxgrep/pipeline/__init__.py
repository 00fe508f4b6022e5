"""Scanning core: targets, ring arithmetic, engine, sinks, progress."""
