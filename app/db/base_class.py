# app/db/base_class.py

from sqlalchemy.orm import declarative_base

# Single declarative base; every model in app/models inherits from it and
# alembic reads its metadata.
Base = declarative_base()
