"""HTTP routes of the confidence pool API."""
