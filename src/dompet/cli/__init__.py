"""Command-line interface for dompet."""
