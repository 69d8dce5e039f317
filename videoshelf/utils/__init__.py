"""Range parsing, media resolution and streaming helpers."""
