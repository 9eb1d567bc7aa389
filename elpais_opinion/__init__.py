"""Parallel El País Opinion scraper for BrowserStack."""
