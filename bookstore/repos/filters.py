# bookstore/repos/filters.py
from sqlalchemy import false


def not_deleted(model):
    """Predykat soft-delete, dokladany jawnie do kazdego odczytu."""
    return model.is_deleted.is_(false())
