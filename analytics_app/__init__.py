"""Analytics service: click aggregation, creation orchestration and dashboard stats."""
