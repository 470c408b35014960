"""Direct messaging service for the artist community platform."""
