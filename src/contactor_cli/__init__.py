"""Command-line shell for contactor. Run: python -m contactor_cli <command> ..."""
