"""Test package for the fraction trainer engine.

Everything under test is headless and deterministic: generators are seeded
and storage is an in-memory double.  Run ``pytest`` from the project root.
"""
