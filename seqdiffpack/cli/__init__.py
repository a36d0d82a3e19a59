"""Command line interface for SeqDiffKit."""
