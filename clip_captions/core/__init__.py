"""Core IR and the pure caption logic.

WHY: Everything timing-sensitive lives here and nowhere else, so it can be
tested without an engine, a clock or a renderer.

HOW: ir.py defines the data structures, ingest.py builds them from
provider JSON, normalizer.py rebases them onto clip time, selector.py and
chunker.py answer "what is visible at t", text.py tidies display text.

RULES:
- No module here performs I/O except ingest.load_transcript_file
- Functions are pure; ChunkBuilder is the only stateful class
"""
