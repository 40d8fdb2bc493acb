"""HTTP layer: versioned routers, dependencies and error translation."""
