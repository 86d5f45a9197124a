"""Built-in minion tasks."""
