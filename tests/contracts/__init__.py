"""Tests for interchange records, search context and the error taxonomy."""
