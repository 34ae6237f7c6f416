"""Service layer: the ``ask`` CLI, command runner and terminal rendering."""
