"""Authorization engine core: static catalog, resolver, normalizer, store interface."""
