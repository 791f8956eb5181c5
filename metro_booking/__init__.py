"""
Metro Ticket Booking System

Shortest-route planning over a fixed metro network, interval-based train
offers per route segment, train selection with downstream regeneration and
transfer checks, and passenger-category fares.
"""

__version__ = "1.0.0"
