r"""A module with utility functions and classes around polytopes and the seeding of the
random number generators.

Submodules
==========

.. autosummary::
   :toctree: generated
   :template: module.rst
   :caption: Submodules

   geometry
   seeding
"""

__all__ = ["geometry", "seeding"]

from . import geometry, seeding
