"""Git submodule handling and the process gateway."""
