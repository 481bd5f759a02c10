"""Terminal presentation of rendered views."""
