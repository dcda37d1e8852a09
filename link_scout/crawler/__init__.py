"""Crawl core: URL resolution, fetching, link extraction and traversal."""
