"""Click subcommands registered on :func:`nnuepack.cli.cli`."""
