"""
activutils/db/base.py
Declarative base shared by all models
"""
from sqlalchemy.orm import declarative_base


Base = declarative_base()
