"""Payload normalization helpers used by the domain normalizers."""
