__all__ = ['DimensionMismatch']

class DimensionMismatch(ValueError):
    """Raised when the legs of neighboring tensors do not fit together

    Parameters
    ----------
    idx : int or None
        index of the offending site
    msg : str
        description of the mismatched dimensions
    """
    def __init__(self, idx, msg:str) -> None:
        self.idx = idx
        if idx is not None:
            msg = f'site {idx}: {msg}'
        super().__init__(msg)
