"""
Models package that defines the database schema.
"""
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Initialize SQLAlchemy
db = SQLAlchemy()
migrate = Migrate()

# Import models to ensure they are registered by SQLAlchemy
from .entry import Entry

__all__ = ['db', 'migrate', 'Entry']
