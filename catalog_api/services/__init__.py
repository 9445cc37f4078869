"""Catalog services.

Services hold the listing/formatting rules and are called by routes.
Store collections are passed in explicitly so tests can hand in fakes.
"""
