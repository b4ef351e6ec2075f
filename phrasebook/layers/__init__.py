"""Step layers - sense (locate), action (interact), validation (wait and verify)."""
