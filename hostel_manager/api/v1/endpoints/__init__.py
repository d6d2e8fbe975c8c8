"""Version 1 endpoint modules, one router each."""
