"""Model sub-pipeline -- schema definitions to TypeScript type declarations.

* :mod:`~clientgen.model_pipeline.parser` -- :func:`build_model_ir`.
* :mod:`~clientgen.model_pipeline.renderer` -- :func:`render_model_files`.
* :mod:`~clientgen.model_pipeline.enum_patch` -- merge curated enum
  metadata (:func:`apply_enum_patches`) and read/write patch documents.
* :mod:`~clientgen.model_pipeline.enum_plan` -- :func:`build_model_enum_plan`.
"""

from clientgen.model_pipeline.enum_patch import (
    apply_enum_patches,
    read_enum_patches,
    write_enum_patch_document,
)
from clientgen.model_pipeline.enum_plan import build_model_enum_plan, load_existing_enums
from clientgen.model_pipeline.parser import build_model_ir
from clientgen.model_pipeline.renderer import render_model_files

__all__ = [
    "apply_enum_patches",
    "build_model_enum_plan",
    "build_model_ir",
    "load_existing_enums",
    "read_enum_patches",
    "render_model_files",
    "write_enum_patch_document",
]
