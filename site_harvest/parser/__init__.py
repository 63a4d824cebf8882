"""site_harvest.parser: Pure parsers for sitemaps, robots.txt and HTML pages."""
