def listify(x):
    """Turn a single key or any iterable of keys into a list."""
    if x is None:
        return []
    elif isinstance(x, list):
        return x
    elif isinstance(x, (str, bytes, int, float)):
        return [x]
    else:
        return list(x)
