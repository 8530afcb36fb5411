"""Test suite for the dog walking booking API."""
