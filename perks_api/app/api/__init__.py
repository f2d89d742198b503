"""HTTP routing for the Perks API, grouped by version."""
