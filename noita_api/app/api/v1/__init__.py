"""Version 1 of the Noïta API."""
