"""Infrastructure: persistence, messaging and delivery services."""
