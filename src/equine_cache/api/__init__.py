"""HTTP admin API for the cache."""
