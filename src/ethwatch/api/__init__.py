"""HTTP API: metrics scrape, health and manual checks."""
