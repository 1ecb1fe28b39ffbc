"""providerkit command-line interface."""
