"""Lookup tables for compatibility scoring."""
