"""site_harvest.crawler: HTTP transport, sitemap resolution, discovery and scraping."""
