from typing import Hashable, Sequence, Tuple, Union

KeyPath = Tuple[Hashable, ...]


def as_key_path(keys: Union[str, Sequence[Hashable]]) -> KeyPath:
    """Normalize a caller-supplied key path to a tuple.

    A bare string is one key, not a sequence of one-character keys.
    """
    if isinstance(keys, (str, bytes)):
        return (keys,)
    return tuple(keys)
