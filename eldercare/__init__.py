"""Django project package for the eldercare backend."""
