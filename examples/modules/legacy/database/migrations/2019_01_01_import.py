"""Never runs: the module is disabled."""
