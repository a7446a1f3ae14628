"""FocusFlow - YouTube study player backend."""
