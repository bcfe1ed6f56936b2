"""Profile Studio: LinkedIn profile scraping, normalization and AI rewriting."""
