"""Built-in CLI sub-commands for clientgen.

* :mod:`~clientgen.commands.codegen` -- run the pipeline, print the IR,
  list renderers.
* :mod:`~clientgen.commands.model` -- model declarations, model IR and the
  enum plan.
* :mod:`~clientgen.commands.barrel` -- barrels for an existing tree.
* :mod:`~clientgen.commands.enum_patch` -- fetch enum labels into a patch
  document.
* :mod:`~clientgen.commands.config` -- view and initialise ``clientgen.json``.

Each module exports a :class:`typer.Typer` sub-application registered on the
root app in :mod:`clientgen.app`.
"""
