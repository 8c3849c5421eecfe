"""Templates bundled with hashira-scaffold, one directory per backend."""
