"""Hostel Manager: residents, rooms and cots, rent, meals, feedback and notices."""

__version__ = "1.0.0"
