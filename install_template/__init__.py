"""install-template - renders per-platform installation guides from templates."""
