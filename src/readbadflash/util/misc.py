def parse_size(size):
    """Parse a non-negative byte count, optionally with a binary K/M/G/T suffix.

    Raises:
        ValueError: if the text is not a number, is too large, or the result is negative.
    """
    if size is None:
        return None
    units = dict(K=1024, M=1024**2, G=1024**3, T=1024**4)
    size = size.strip().upper()

    for unit, factor in units.items():
        if size.endswith(unit):
            try:
                result = int(float(size[:-1]) * factor)
            except OverflowError:
                raise ValueError(f'Size is too large: {size}') from None
            break
    else:
        result = int(size)

    if result < 0:
        raise ValueError(f'Size can not be negative: {size}')
    return result
