"""The :mod:`polygibbs.core` submodule implements the core functionalities around the
sampler: its immutable configuration, the classes of errors and warnings raised on
ill-posed constraint systems or failures of the LP oracle, and the hook-callback
mechanism that allows to observe a sampling run to a high degree of detail."""
