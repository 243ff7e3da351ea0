"""HTTP primitives: request snapshot, headers, cookies, responses."""
