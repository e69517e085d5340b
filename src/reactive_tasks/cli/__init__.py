"""Console demo entry point (python -m reactive_tasks)."""
