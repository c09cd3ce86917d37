"""Core rule IR: fact store, variables, operators and rules."""
