"""Click subcommands registered on the ``depregistry`` group."""
