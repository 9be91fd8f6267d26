"""Reservation countdown and shortlist core for the Nyala Villas pre-sale."""

__version__ = "0.1.0"
