"""Small helpers shared across ghrepo packages."""
