"""Click plumbing shared by the rollctl entry point."""
