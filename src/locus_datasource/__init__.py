"""
locus-datasource: the integration contract for Locus content providers.

A data source turns a search query into topics (questions, articles, videos)
and a topic into content items (answers, excerpts, transcripts).
"""

__version__ = "0.1.0"
