"""Tests for logging and host configuration."""
