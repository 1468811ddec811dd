"""Contacts manager web application.

Server-rendered CRUD over contacts and their phone numbers, gated by
guest/user/administrator roles resolved from a session cookie.
"""

__version__ = "0.1.0"
