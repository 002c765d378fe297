"""User Portal package.

Registration, session-based login, a dashboard and an admin user listing.
Organized by feature modules (users, sessions, home) with a thin Flask
controller layer over service/repository layers.
"""
