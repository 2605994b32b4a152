"""Core logic shared by the CLI: selection state, disk metrics and theming."""
