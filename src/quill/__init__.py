"""Quill - per-owner journal entries with a bounded index."""
