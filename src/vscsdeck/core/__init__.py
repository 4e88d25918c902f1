"""Shared vocabulary: wire models, errors, and host/deck interfaces."""
