"""Built-in CLI commands for specdoc.

* :mod:`~specdoc.commands.generate` -- render documentation artifacts.
* :mod:`~specdoc.commands.inspect` -- summarise the resources and
  endpoints of a spec.

Each module exports a plain callback registered on the root app in
:mod:`specdoc.app`.
"""
