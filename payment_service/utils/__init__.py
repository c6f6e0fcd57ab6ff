"""Helpers for identifiers and masking."""
