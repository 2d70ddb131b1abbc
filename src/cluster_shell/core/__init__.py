"""Resource-kind agnostic core of the shell: cells, identities, list pipeline
and navigation state."""
