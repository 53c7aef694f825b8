"""Redirect/creation service: allocates short codes and serves redirects."""
