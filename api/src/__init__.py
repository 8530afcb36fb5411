"""FastAPI service for the dog walking booking backend.

This package records owners, their dogs and walk bookings in MongoDB and
lists upcoming bookings joined with their owner and dogs.
"""

__version__ = "0.1.0"
