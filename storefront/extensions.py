"""
Flask extensions initialization.
"""
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Database (read-only from the analytics engine)
db = SQLAlchemy()

# Migrations
migrate = Migrate()
