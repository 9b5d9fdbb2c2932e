"""Game session engine for small educational mini-games.

Kept free of UI and transport concerns so it can be reused by a web front end,
the terminal player and tests.
"""
