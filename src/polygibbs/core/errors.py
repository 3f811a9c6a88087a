"""Error and warning classes for signaling ill-posed constraint systems and failures of
the LP oracle during the seed search and the extent computations, as well as a
convenience function for raising these errors or warnings."""

from warnings import warn as _warn


class DimensionalityError(ValueError):
    """Exception class for raising errors when the constraint system has too few
    inequalities to bound a region of the given dimension."""


class SeedSearchFailure(RuntimeError):
    """Exception class for raising errors when no feasible seed point could be found
    for the sampling chain."""


class SeedSearchWarning(RuntimeWarning):
    """Warning class for signaling that no feasible seed point could be found for the
    sampling chain."""


class ExtentWarning(RuntimeWarning):
    """Warning class for signaling that the extent of a coordinate could not be
    computed, and that the corresponding sample has been discarded."""


def raise_or_warn_on_seed_failure(msg: str, raises: bool) -> None:
    """Raises an error or warning with the given message due to a failed seed search.

    Parameters
    ----------
    msg : str
        The exception or warning message.
    raises : bool
        If ``True``, raises an exception; otherwise, throws a warning.

    Raises
    ------
    SeedSearchFailure
        Raises :class:`SeedSearchFailure` if ``raises=True``; otherwise raises
        :class:`SeedSearchWarning`.
    """
    if raises:
        raise SeedSearchFailure(msg)
    else:
        _warn(msg, SeedSearchWarning)
