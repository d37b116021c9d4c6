"""Namespace reserved for a Horizon API client; it holds no modules yet."""