"""Quiz domain services: catalog, lifecycle, answers and ranking.

HTTP routes and socket handlers import from here; nothing in this package
touches request or response objects. Failures are raised as
``quizrace.errors`` exceptions.
"""
