"""freightrate: freight package rating and carrier serviceability engine."""
