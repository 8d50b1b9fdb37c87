# src/ideaboard/services/__init__.py
"""Business logic services for the Ideaboard application.

Each service module exposes plain functions that take an explicit SQLAlchemy
session as their first argument.
"""
