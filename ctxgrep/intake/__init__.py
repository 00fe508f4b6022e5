"""Source side: validation, decompression, byte-source adapters."""
