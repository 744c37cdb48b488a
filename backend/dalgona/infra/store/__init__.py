from .sqlalchemy_record_store import COLLECTIONS, SQLAlchemyRecordStore

__all__ = ["COLLECTIONS", "SQLAlchemyRecordStore"]
