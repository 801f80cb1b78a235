"""
This file ensures that all models are imported and registered with SQLAlchemy
when the application context is created, along with the listeners that
write journals on flush. Flask-Migrate relies on the former to detect all
tables.
"""
from .user import User
from .journal import Journal
from .journaled import Journaled
from .project import Project
from .issue import Issue
from .wiki_page import WikiPage
from .. import signals  # noqa: F401

__all__ = ["User", "Journal", "Journaled", "Project", "Issue", "WikiPage"]
