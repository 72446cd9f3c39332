"""Tests for the data source protocol, base classes and registry."""
